"""Domain value types for the tax computations.

Every model here is frozen: instances are created once per computation (or
once at import for the static tables) and never mutated.

Naming:
  - TaxSlab / TaxRegime / TaxSlabsYear → static rate tables
  - CapitalGainInput / CapitalGainResult → one capital-gains calculation
  - IncomeData / TaxPaid → inputs of the aggregate summary
  - RegimeTax / RegimeComparison / TaxSummary → derived results
"""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class AssetType(str, Enum):
    EQUITY = "equity"
    DEBT = "debt"
    PROPERTY = "property"
    GOLD = "gold"


class GainType(str, Enum):
    SHORT = "short"
    LONG = "long"


class RegimeName(str, Enum):
    OLD = "old"
    NEW = "new"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# ── Rate tables ──────────────────────────────────────────────────────────

class TaxSlab(_Frozen):
    """One income bracket; ``income_to=None`` means unbounded."""
    income_from: float
    income_to: Optional[float] = None
    tax_rate: float = Field(..., description="Marginal rate in percent")
    description: Optional[str] = None


class Rebate(_Frozen):
    """Section 87A rebate for resident individuals."""
    income_limit: float
    max_rebate: float


class TaxRegime(_Frozen):
    name: str
    regime: RegimeName
    description: str = ""
    applicable_from: str = ""
    is_default: bool = False
    slabs: Tuple[TaxSlab, ...]
    # Income threshold (as a string key) → surcharge percent
    surcharge: Optional[Dict[str, float]] = None
    cess: float = Field(4.0, description="Health & education cess in percent")
    standard_deduction: float = 0.0
    chapter_via_allowed: bool = False
    rebate: Optional[Rebate] = None
    deductions: Tuple[str, ...] = ()


class TaxSlabsYear(_Frozen):
    assessment_year: str
    regimes: Tuple[TaxRegime, ...]

    def get(self, regime: RegimeName) -> TaxRegime:
        for candidate in self.regimes:
            if candidate.regime == regime:
                return candidate
        raise ValueError(f"No {regime.value} regime for AY {self.assessment_year}")

    @property
    def default_regime(self) -> TaxRegime:
        return next(r for r in self.regimes if r.is_default)


# ── Slab evaluation results ──────────────────────────────────────────────

class SlabTax(_Frozen):
    slab: TaxSlab
    tax: float


class SurchargeCess(_Frozen):
    surcharge_rate: float
    surcharge: float
    cess: float
    total_tax: float


class RegimeTax(_Frozen):
    """Tax on a taxable income under one regime."""
    regime: RegimeName
    taxable_income: float
    tax_amount: float = Field(..., description="Slab tax before rebate")
    rebate: float
    surcharge_rate: float
    surcharge: float
    cess: float
    total_tax: float
    effective_tax_rate: float
    breakup: List[SlabTax] = Field(default_factory=list)


# ── Capital gains ────────────────────────────────────────────────────────

class CapitalGainInput(_Frozen):
    asset_type: AssetType
    acquisition_date: date
    disposal_date: date
    purchase_price: float = Field(0.0, ge=0)
    sale_price: float = Field(0.0, ge=0)
    expenses: float = Field(0.0, ge=0)
    # Derived from the dates when omitted
    purchase_fy: Optional[str] = None
    sale_fy: Optional[str] = None


class CapitalGainResult(_Frozen):
    asset_type: AssetType
    gain_type: GainType
    holding_days: int
    purchase_fy: str
    sale_fy: str
    capital_gain: float
    indexed_cost: float
    taxable_gain: float
    tax_rate: float
    tax_amount: float
    surcharge: float
    cess: float
    total_tax: float
    approximated_marginal_rate: bool = False


# ── Aggregate summary ────────────────────────────────────────────────────

class IncomeData(_Frozen):
    salary: float = 0.0
    house_property: float = 0.0   # may be negative (loss from house property)
    short_term_capital_gains: float = 0.0
    long_term_capital_gains: float = 0.0
    business: float = 0.0
    interest: float = 0.0
    dividend: float = 0.0
    other_sources: float = 0.0

    @property
    def capital_gains(self) -> float:
        return self.short_term_capital_gains + self.long_term_capital_gains

    @property
    def other(self) -> float:
        return self.business + self.interest + self.dividend + self.other_sources

    @property
    def total(self) -> float:
        return self.salary + self.house_property + self.capital_gains + self.other


class TaxPaid(_Frozen):
    tds: float = 0.0
    advance_tax: float = 0.0
    self_assessment_tax: float = 0.0

    @property
    def total(self) -> float:
        return self.tds + self.advance_tax + self.self_assessment_tax


class RegimeOutcome(_Frozen):
    """Deductions and tax for one regime inside a comparison."""
    regime: RegimeName
    standard_deduction: float
    chapter_via_deductions: float
    total_deductions: float
    taxable_income: float
    tax: RegimeTax


class RegimeComparison(_Frozen):
    assessment_year: str
    total_income: float
    old: RegimeOutcome
    new: RegimeOutcome
    recommended_regime: RegimeName
    savings: float

    def outcome(self, regime: RegimeName) -> RegimeOutcome:
        return self.old if regime == RegimeName.OLD else self.new


class TaxSummary(_Frozen):
    assessment_year: str
    tax_regime: RegimeName
    recommended_regime: RegimeName

    total_income: float
    salary_income: float
    house_property_income: float
    capital_gains_income: float
    other_income: float

    standard_deduction: float
    deductions_80c: float
    deductions_80d: float
    other_deductions: float
    total_deductions: float
    taxable_income: float

    tax_before_rebate: float
    rebate_amount: float
    surcharge_amount: float
    cess_amount: float
    estimated_tax: float

    tds_amount: float
    advance_tax_paid: float
    self_assessment_tax_paid: float
    total_tax_paid: float
    tax_payable: float
    refund_due: float

    comparison: RegimeComparison
