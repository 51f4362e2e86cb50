"""Income-tax slabs, surcharge and cess by assessment year and regime.

Also holds the capital-gains rate table and holding-period thresholds used
by ``taxcore.services.capital_gains_service``.

AY 2023-24 … 2026-27 (FY 2022-23 … 2025-26).  The new regime is the
default regime of every year in this table.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from taxcore.config import settings
from taxcore.models.tax import (
    AssetType,
    GainType,
    Rebate,
    RegimeName,
    TaxRegime,
    TaxSlab,
    TaxSlabsYear,
)

logger = logging.getLogger(__name__)


def _lakh(amount: float) -> str:
    value = amount / 100_000
    return f"{value:g}"


def _slabs(*bands: Tuple[float, Optional[float], float]) -> Tuple[TaxSlab, ...]:
    """Build contiguous slabs from ``(from, to, rate)`` tuples."""
    slabs = []
    for lower, upper, rate in bands:
        if upper is None:
            text = f"{rate:g}% tax above ₹{_lakh(lower)} lakh"
        elif rate == 0:
            text = f"Nil tax up to ₹{_lakh(upper)} lakh"
        else:
            text = f"{rate:g}% tax between ₹{_lakh(lower)}-{_lakh(upper)} lakh"
        slabs.append(TaxSlab(income_from=lower, income_to=upper, tax_rate=rate, description=text))
    return tuple(slabs)


# ── Surcharge ─────────────────────────────────────────────────────────────
SURCHARGE_FULL = MappingProxyType({
    "5000000": 10.0,    # above ₹50 lakh
    "10000000": 15.0,   # above ₹1 crore
    "20000000": 25.0,   # above ₹2 crore
    "50000000": 37.0,   # above ₹5 crore
})

# From AY 2024-25 the new regime caps surcharge at 25 %
SURCHARGE_NEW_REGIME_CAPPED = MappingProxyType({
    "5000000": 10.0,
    "10000000": 15.0,
    "20000000": 25.0,
})

CESS_RATE = 4.0

OLD_REGIME_DEDUCTIONS = (
    "Section 80C (up to ₹1.5 lakh)",
    "Section 80CCC (Pension plans)",
    "Section 80CCD (NPS contribution)",
    "Section 80D (Health Insurance)",
    "Section 80DD (Medical treatment of dependent with disability)",
    "Section 80DDB (Medical treatment for specified diseases)",
    "Section 80E (Interest on education loan)",
    "Section 80EE/EEA (Interest on home loan)",
    "Section 80G (Donations)",
    "Section 80GG (Rent paid)",
    "Section 80TTA (Interest on savings account)",
    "HRA Exemption",
    "LTA Exemption",
    "Standard Deduction on salary",
)

NEW_REGIME_DEDUCTIONS = ("Basic Standard Deduction on salary income",)

# ── Old regime (unchanged across the years covered) ──────────────────────
OLD_REGIME_SLABS = _slabs(
    (0, 250_000, 0),
    (250_000, 500_000, 5),
    (500_000, 1_000_000, 20),
    (1_000_000, None, 30),
)

# Resident individuals aged 60–79
SENIOR_CITIZEN_SLABS = _slabs(
    (0, 300_000, 0),
    (300_000, 500_000, 5),
    (500_000, 1_000_000, 20),
    (1_000_000, None, 30),
)

# Resident individuals aged 80 and above
SUPER_SENIOR_CITIZEN_SLABS = _slabs(
    (0, 500_000, 0),
    (500_000, 1_000_000, 20),
    (1_000_000, None, 30),
)


def _old_regime(applicable_from: str) -> TaxRegime:
    return TaxRegime(
        name="Old Tax Regime",
        regime=RegimeName.OLD,
        description="Higher tax rates but allows claiming various deductions and exemptions",
        applicable_from=applicable_from,
        is_default=False,
        slabs=OLD_REGIME_SLABS,
        surcharge=dict(SURCHARGE_FULL),
        cess=CESS_RATE,
        standard_deduction=50_000,
        chapter_via_allowed=True,
        rebate=Rebate(income_limit=500_000, max_rebate=12_500),
        deductions=OLD_REGIME_DEDUCTIONS,
    )


def _new_regime(
    applicable_from: str,
    slabs: Tuple[TaxSlab, ...],
    standard_deduction: float,
    rebate: Rebate,
    surcharge: Mapping[str, float] = SURCHARGE_NEW_REGIME_CAPPED,
) -> TaxRegime:
    return TaxRegime(
        name="New Tax Regime",
        regime=RegimeName.NEW,
        description="Default tax regime with lower rates but no deductions/exemptions",
        applicable_from=applicable_from,
        is_default=True,
        slabs=slabs,
        surcharge=dict(surcharge),
        cess=CESS_RATE,
        standard_deduction=standard_deduction,
        chapter_via_allowed=False,
        rebate=rebate,
        deductions=NEW_REGIME_DEDUCTIONS,
    )


# ── Per-year tables ───────────────────────────────────────────────────────

TAX_SLABS_2023_24 = TaxSlabsYear(
    assessment_year="2023-24",
    regimes=(
        _new_regime(
            "FY 2022-23",
            _slabs(
                (0, 250_000, 0),
                (250_000, 500_000, 5),
                (500_000, 750_000, 10),
                (750_000, 1_000_000, 15),
                (1_000_000, 1_250_000, 20),
                (1_250_000, 1_500_000, 25),
                (1_500_000, None, 30),
            ),
            standard_deduction=0,
            rebate=Rebate(income_limit=500_000, max_rebate=12_500),
            surcharge=SURCHARGE_FULL,
        ),
        _old_regime("Before FY 2022-23"),
    ),
)

TAX_SLABS_2024_25 = TaxSlabsYear(
    assessment_year="2024-25",
    regimes=(
        _new_regime(
            "FY 2023-24",
            _slabs(
                (0, 300_000, 0),
                (300_000, 600_000, 5),
                (600_000, 900_000, 10),
                (900_000, 1_200_000, 15),
                (1_200_000, 1_500_000, 20),
                (1_500_000, None, 30),
            ),
            standard_deduction=50_000,
            rebate=Rebate(income_limit=700_000, max_rebate=25_000),
        ),
        _old_regime("Before FY 2023-24"),
    ),
)

TAX_SLABS_2025_26 = TaxSlabsYear(
    assessment_year="2025-26",
    regimes=(
        _new_regime(
            "FY 2024-25",
            _slabs(
                (0, 300_000, 0),
                (300_000, 700_000, 5),
                (700_000, 1_000_000, 10),
                (1_000_000, 1_200_000, 15),
                (1_200_000, 1_500_000, 20),
                (1_500_000, None, 30),
            ),
            standard_deduction=75_000,
            rebate=Rebate(income_limit=700_000, max_rebate=25_000),
        ),
        _old_regime("FY 2024-25"),
    ),
)

TAX_SLABS_2026_27 = TaxSlabsYear(
    assessment_year="2026-27",
    regimes=(
        _new_regime(
            "FY 2025-26",
            _slabs(
                (0, 400_000, 0),
                (400_000, 800_000, 5),
                (800_000, 1_200_000, 10),
                (1_200_000, 1_600_000, 15),
                (1_600_000, 2_000_000, 20),
                (2_000_000, 2_400_000, 25),
                (2_400_000, None, 30),
            ),
            standard_deduction=75_000,
            rebate=Rebate(income_limit=1_200_000, max_rebate=60_000),
        ),
        _old_regime("FY 2025-26"),
    ),
)

TAX_SLABS_BY_YEAR: Mapping[str, TaxSlabsYear] = MappingProxyType({
    table.assessment_year: table
    for table in (TAX_SLABS_2023_24, TAX_SLABS_2024_25, TAX_SLABS_2025_26, TAX_SLABS_2026_27)
})


def default_tax_slabs() -> TaxSlabsYear:
    """Table for ``settings.DEFAULT_ASSESSMENT_YEAR``, or the newest table
    when the configured year has none."""
    table = TAX_SLABS_BY_YEAR.get(settings.DEFAULT_ASSESSMENT_YEAR)
    if table is None:
        newest = max(TAX_SLABS_BY_YEAR)
        logger.warning(
            "DEFAULT_ASSESSMENT_YEAR %r has no slab table — using AY %s.",
            settings.DEFAULT_ASSESSMENT_YEAR,
            newest,
        )
        table = TAX_SLABS_BY_YEAR[newest]
    return table


def get_tax_slabs_by_year(assessment_year: Optional[str]) -> TaxSlabsYear:
    """Slab table for *assessment_year*.

    Unknown years fall back to the default table (see ``default_tax_slabs``).
    """
    table = TAX_SLABS_BY_YEAR.get(assessment_year or "")
    if table is None:
        table = default_tax_slabs()
        logger.warning(
            "No slab table for AY %r — using AY %s.",
            assessment_year,
            table.assessment_year,
        )
    return table


def get_regime(assessment_year: Optional[str], regime: RegimeName) -> TaxRegime:
    return get_tax_slabs_by_year(assessment_year).get(regime)


# ── Capital gains ─────────────────────────────────────────────────────────

# Holding period (days) that must be *exceeded* for a gain to be long-term
HOLDING_PERIOD_THRESHOLDS: Mapping[AssetType, int] = MappingProxyType({
    AssetType.EQUITY: 365,
    AssetType.PROPERTY: 730,
    AssetType.DEBT: 1095,
    AssetType.GOLD: 1095,
})

# Flat rate in percent; None means taxed at the filer's slab rate
CAPITAL_GAINS_RATES: Mapping[Tuple[AssetType, GainType], Optional[float]] = MappingProxyType({
    (AssetType.EQUITY, GainType.SHORT): 15.0,
    (AssetType.EQUITY, GainType.LONG): 10.0,
    (AssetType.DEBT, GainType.SHORT): None,
    (AssetType.DEBT, GainType.LONG): 20.0,
    (AssetType.PROPERTY, GainType.SHORT): None,
    (AssetType.PROPERTY, GainType.LONG): 20.0,
    (AssetType.GOLD, GainType.SHORT): None,
    (AssetType.GOLD, GainType.LONG): 20.0,
})

INDEXED_ASSETS = frozenset({AssetType.DEBT, AssetType.PROPERTY, AssetType.GOLD})
