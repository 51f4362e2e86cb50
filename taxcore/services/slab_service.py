"""Slab-based income tax with surcharge and cess.

    tax       = Σ (min(income, slab.to) − slab.from) × rate   for slabs below income
    surcharge = tax × rate of the highest threshold ≤ income
    cess      = (tax + surcharge) × cess %
    total     = tax + surcharge + cess

Slab lists are assumed contiguous and ascending; that is not re-checked here.
No marginal relief is applied on surcharge.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from taxcore.config import settings
from taxcore.models.tax import (
    RegimeName,
    RegimeTax,
    SlabTax,
    SurchargeCess,
    TaxRegime,
    TaxSlab,
)
from taxcore.tables.slabs import SENIOR_CITIZEN_SLABS, SUPER_SENIOR_CITIZEN_SLABS
from taxcore.utils.helpers import round_currency

logger = logging.getLogger(__name__)


def _taxable_in_slab(income: float, slab: TaxSlab) -> float:
    upper = slab.income_to if slab.income_to is not None else float("inf")
    return min(income, upper) - slab.income_from


def compute_slab_tax(income: float, slabs: Sequence[TaxSlab]) -> float:
    """Tax on *income* by summing the marginal contribution of each slab."""
    tax = 0.0
    for slab in slabs:
        if income > slab.income_from:
            tax += _taxable_in_slab(income, slab) * slab.tax_rate / 100
    return tax


def slab_breakup(income: float, slabs: Sequence[TaxSlab]) -> List[SlabTax]:
    """Per-slab tax lines, skipping slabs that contribute nothing."""
    lines: list[SlabTax] = []
    for slab in slabs:
        if income <= slab.income_from:
            continue
        tax = _taxable_in_slab(income, slab) * slab.tax_rate / 100
        if tax > 0:
            lines.append(SlabTax(slab=slab, tax=round_currency(tax)))
    return lines


def marginal_rate(income: float, slabs: Sequence[TaxSlab]) -> float:
    """Rate of the highest slab that *income* reaches into."""
    for slab in reversed(slabs):
        if income > slab.income_from:
            return slab.tax_rate
    return 0.0


def surcharge_rate(total_income: float, regime: TaxRegime) -> float:
    """Step function over the regime's surcharge thresholds."""
    if not regime.surcharge:
        return 0.0
    thresholds = sorted(regime.surcharge, key=float, reverse=True)
    for threshold in thresholds:
        if total_income >= float(threshold):
            return regime.surcharge[threshold]
    return 0.0


def apply_surcharge_and_cess(
    base_tax: float,
    total_income_for_surcharge: float,
    regime: TaxRegime,
) -> SurchargeCess:
    """Layer surcharge and then cess on top of *base_tax*."""
    rate = surcharge_rate(total_income_for_surcharge, regime)
    surcharge = base_tax * rate / 100
    cess = (base_tax + surcharge) * regime.cess / 100
    return SurchargeCess(
        surcharge_rate=rate,
        surcharge=surcharge,
        cess=cess,
        total_tax=base_tax + surcharge + cess,
    )


def select_slabs(regime: TaxRegime, age: int = 30, is_resident: bool = True) -> Sequence[TaxSlab]:
    """Age-specific slabs apply only to resident individuals in the old regime."""
    if regime.regime != RegimeName.OLD or not is_resident:
        return regime.slabs
    if age >= settings.SUPER_SENIOR_CITIZEN_AGE:
        return SUPER_SENIOR_CITIZEN_SLABS
    if age >= settings.SENIOR_CITIZEN_AGE:
        return SENIOR_CITIZEN_SLABS
    return regime.slabs


def rebate_87a(tax: float, taxable_income: float, regime: TaxRegime, is_resident: bool = True) -> float:
    """Section 87A rebate: min(tax, max_rebate) within the regime's income limit."""
    if not is_resident or regime.rebate is None:
        return 0.0
    if taxable_income > regime.rebate.income_limit:
        return 0.0
    return min(tax, regime.rebate.max_rebate)


def calculate_regime_tax(
    taxable_income: float,
    regime: TaxRegime,
    age: int = 30,
    is_resident: bool = True,
) -> RegimeTax:
    """Full liability on *taxable_income* under *regime*.

    Slab tax (age variant) → 87A rebate → surcharge on the rebated tax,
    using *taxable_income* as the surcharge basis → cess.
    """
    income = max(0.0, taxable_income)
    slabs = select_slabs(regime, age, is_resident)

    tax_amount = compute_slab_tax(income, slabs)
    rebate = rebate_87a(tax_amount, income, regime, is_resident)
    layered = apply_surcharge_and_cess(tax_amount - rebate, income, regime)

    tax_r = round_currency(tax_amount)
    rebate_r = round_currency(rebate)
    surcharge_r = round_currency(layered.surcharge)
    cess_r = round_currency(layered.cess)
    # total is the sum of the reported parts
    total_tax = round_currency(tax_r - rebate_r + surcharge_r + cess_r)
    effective = total_tax / income * 100 if income > 0 else 0.0

    logger.debug(
        "%s regime: taxable=%.2f slab_tax=%.2f rebate=%.2f total=%.2f",
        regime.regime.value, income, tax_amount, rebate, total_tax,
    )

    return RegimeTax(
        regime=regime.regime,
        taxable_income=round_currency(income),
        tax_amount=tax_r,
        rebate=rebate_r,
        surcharge_rate=layered.surcharge_rate,
        surcharge=surcharge_r,
        cess=cess_r,
        total_tax=total_tax,
        effective_tax_rate=round_currency(effective),
        breakup=slab_breakup(income, slabs),
    )
