"""Capital-gains classification, indexation and tax.

Holding period (strictly greater than):
    equity    > 365 days   → long-term
    property  > 730 days   → long-term
    debt/gold > 1095 days  → long-term

Rates:
    equity    STCG 15 %  |  LTCG 10 % above the ₹1,00,000 exemption
    others    STCG slab  |  LTCG 20 % on indexed cost

Indexed cost = cost × CII(sale FY) / CII(purchase FY)
"""

from __future__ import annotations

import logging
import math
from datetime import date, datetime
from typing import Mapping, Optional, Sequence, Union

from taxcore.config import settings
from taxcore.models.tax import (
    AssetType,
    CapitalGainInput,
    CapitalGainResult,
    GainType,
    RegimeName,
    TaxSlab,
)
from taxcore.services.slab_service import (
    apply_surcharge_and_cess,
    compute_slab_tax,
    marginal_rate,
)
from taxcore.tables.cii import CII_BASE_YEAR, CII_FALLBACK, COST_INFLATION_INDEX
from taxcore.tables.slabs import (
    CAPITAL_GAINS_RATES,
    HOLDING_PERIOD_THRESHOLDS,
    INDEXED_ASSETS,
    get_regime,
)
from taxcore.utils.helpers import financial_year_of, fy_start_year, round_currency

logger = logging.getLogger(__name__)

_SECONDS_PER_DAY = 86_400


# ── Holding period ───────────────────────────────────────────────────────

def holding_period_days(
    acquisition: Union[date, datetime],
    disposal: Union[date, datetime],
) -> int:
    """Absolute calendar-day difference, rounded up for partial days."""
    if isinstance(acquisition, datetime) or isinstance(disposal, datetime):
        start = acquisition if isinstance(acquisition, datetime) else datetime.combine(acquisition, datetime.min.time())
        end = disposal if isinstance(disposal, datetime) else datetime.combine(disposal, datetime.min.time())
        return math.ceil(abs((end - start).total_seconds()) / _SECONDS_PER_DAY)
    return abs((disposal - acquisition).days)


def classify_gain(asset_type: Union[AssetType, str], holding_days: int) -> GainType:
    """Short- or long-term; unrecognised asset types use the equity threshold."""
    try:
        asset = AssetType(asset_type)
    except ValueError:
        asset = AssetType.EQUITY
    threshold = HOLDING_PERIOD_THRESHOLDS[asset]
    return GainType.LONG if holding_days > threshold else GainType.SHORT


# ── Indexation ───────────────────────────────────────────────────────────

def _cii_value(fy: str, cii_table: Mapping[str, int]) -> int:
    value = cii_table.get(fy)
    if value is None:
        logger.warning(
            "No cost inflation index for FY %s — using %s.", fy, CII_FALLBACK
        )
        return CII_FALLBACK
    if value <= 0:
        raise ValueError(f"Cost inflation index for FY {fy} must be positive, got {value}")
    return value


def indexed_cost(
    cost: float,
    purchase_fy: str,
    sale_fy: str,
    cii_table: Mapping[str, int] = COST_INFLATION_INDEX,
) -> float:
    """round(cost × CII[sale_fy] / CII[purchase_fy]).

    A financial year missing from *cii_table* counts as index 100.
    """
    purchase_index = _cii_value(purchase_fy, cii_table)
    sale_index = _cii_value(sale_fy, cii_table)
    return float(round(cost * sale_index / purchase_index))


def indexation_base_year(purchase_fy: str) -> str:
    """Assets bought before the CII base year are indexed from the base year."""
    if fy_start_year(purchase_fy) < fy_start_year(CII_BASE_YEAR):
        return CII_BASE_YEAR
    return purchase_fy


# ── Tax ──────────────────────────────────────────────────────────────────

def approximate_marginal_rate(
    gain: float,
    other_income: float,
    slabs: Sequence[TaxSlab],
) -> tuple[float, float]:
    """Tax the whole *gain* at the marginal rate of *other_income*.

    This does not integrate across slabs the gain would push into; it is the
    calculator's quick estimate when other income is not combined.
    Returns ``(rate, tax)``.
    """
    rate = marginal_rate(other_income, slabs)
    return rate, gain * rate / 100


def compute_capital_gains_tax(
    cg_input: CapitalGainInput,
    other_income: float = 0.0,
    include_other_income: bool = False,
    *,
    assessment_year: Optional[str] = None,
    regime: RegimeName = RegimeName.OLD,
    cii_table: Mapping[str, int] = COST_INFLATION_INDEX,
) -> CapitalGainResult:
    """Compute gain, exemption, indexation and the tax on one disposal.

    *regime* / *assessment_year* choose the slabs for slab-rate gains and the
    surcharge table.
    """
    tax_regime = get_regime(assessment_year or settings.DEFAULT_ASSESSMENT_YEAR, regime)
    asset = cg_input.asset_type

    # 1–2. Holding period & classification
    days = holding_period_days(cg_input.acquisition_date, cg_input.disposal_date)
    gain_type = classify_gain(asset, days)

    purchase_fy = cg_input.purchase_fy or financial_year_of(cg_input.acquisition_date)
    sale_fy = cg_input.sale_fy or financial_year_of(cg_input.disposal_date)

    # 3. Cost (indexed for long-term non-equity)
    cost = cg_input.purchase_price
    if gain_type == GainType.LONG and asset in INDEXED_ASSETS:
        cost = indexed_cost(
            cg_input.purchase_price,
            indexation_base_year(purchase_fy),
            sale_fy,
            cii_table,
        )

    # 4. Gain
    capital_gain = max(0.0, cg_input.sale_price - cost - cg_input.expenses)

    # 5. Equity LTCG exemption
    taxable_gain = capital_gain
    if asset == AssetType.EQUITY and gain_type == GainType.LONG:
        taxable_gain = max(0.0, capital_gain - settings.LTCG_EQUITY_EXEMPTION)

    # 6. Rate
    flat_rate = CAPITAL_GAINS_RATES[(asset, gain_type)]
    approximated = False
    if flat_rate is not None:
        rate = flat_rate
        tax = taxable_gain * rate / 100
    elif include_other_income:
        tax = (
            compute_slab_tax(other_income + taxable_gain, tax_regime.slabs)
            - compute_slab_tax(other_income, tax_regime.slabs)
        )
        rate = tax / taxable_gain * 100 if taxable_gain > 0 else 0.0
    else:
        rate, tax = approximate_marginal_rate(taxable_gain, other_income, tax_regime.slabs)
        approximated = True

    # 7. Surcharge & cess
    basis = other_income + taxable_gain if include_other_income else taxable_gain
    layered = apply_surcharge_and_cess(tax, basis, tax_regime)

    tax_amount = round_currency(tax)
    surcharge = round_currency(layered.surcharge)
    cess = round_currency(layered.cess)

    logger.debug(
        "%s %s-term gain=%.2f taxable=%.2f rate=%.2f total=%.2f",
        asset.value, gain_type.value, capital_gain, taxable_gain, rate, layered.total_tax,
    )

    return CapitalGainResult(
        asset_type=asset,
        gain_type=gain_type,
        holding_days=days,
        purchase_fy=purchase_fy,
        sale_fy=sale_fy,
        capital_gain=round_currency(capital_gain),
        indexed_cost=round_currency(cost),
        taxable_gain=round_currency(taxable_gain),
        tax_rate=round_currency(rate),
        tax_amount=tax_amount,
        surcharge=surcharge,
        cess=cess,
        total_tax=round_currency(tax_amount + surcharge + cess),
        approximated_marginal_rate=approximated,
    )
