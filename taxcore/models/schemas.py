"""Pydantic request / response schemas for all API endpoints.

Field names are camelCase to match the filing front end.  Amount fields go
through ``parse_amount`` so ``"1,50,000"`` or ``"₹ 2,500"`` are accepted;
unparsable amounts become 0.
"""

from __future__ import annotations

from datetime import date
from typing import Annotated, Dict, List, Optional

from pydantic import BaseModel, BeforeValidator, Field

from taxcore.models.tax import (
    AssetType,
    CapitalGainInput,
    CapitalGainResult,
    GainType,
    IncomeData,
    RegimeComparison,
    RegimeName,
    RegimeOutcome,
    RegimeTax,
    TaxPaid,
    TaxRegime,
    TaxSlab,
    TaxSummary,
)
from taxcore.utils.helpers import parse_amount

Amount = Annotated[float, BeforeValidator(parse_amount)]

_YEAR_PATTERN = r"^\d{4}-\d{2}$"

# ── Shared pieces ────────────────────────────────────────────────────────

class SlabLine(BaseModel):
    incomeFrom: float
    incomeTo: Optional[float] = Field(None, description="null = no upper limit")
    taxRate: float = Field(..., description="Marginal rate in percent")
    description: Optional[str] = None
    tax: Optional[float] = Field(None, description="Tax falling in this slab")

    @classmethod
    def from_slab(cls, slab: TaxSlab, tax: Optional[float] = None) -> "SlabLine":
        return cls(
            incomeFrom=slab.income_from,
            incomeTo=slab.income_to,
            taxRate=slab.tax_rate,
            description=slab.description,
            tax=tax,
        )

class RegimeTaxResponse(BaseModel):
    regime: RegimeName
    taxableIncome: float
    taxAmount: float = Field(..., description="Slab tax before rebate")
    rebate: float = Field(..., description="Section 87A rebate")
    surchargeRate: float
    surcharge: float
    cess: float
    totalTax: float
    effectiveTaxRate: float = Field(..., description="totalTax / taxableIncome in percent")
    breakup: List[SlabLine]

    @classmethod
    def from_regime_tax(cls, result: RegimeTax, **extra) -> "RegimeTaxResponse":
        return cls(
            regime=result.regime,
            taxableIncome=result.taxable_income,
            taxAmount=result.tax_amount,
            rebate=result.rebate,
            surchargeRate=result.surcharge_rate,
            surcharge=result.surcharge,
            cess=result.cess,
            totalTax=result.total_tax,
            effectiveTaxRate=result.effective_tax_rate,
            breakup=[SlabLine.from_slab(line.slab, line.tax) for line in result.breakup],
            **extra,
        )

# ── 1. Slab tax  (/calculators/slab-tax) ─────────────────────────────────

class SlabTaxRequest(BaseModel):
    income: Amount = Field(..., description="Taxable income in INR")
    assessmentYear: Optional[str] = Field(None, pattern=_YEAR_PATTERN)
    regime: RegimeName = RegimeName.NEW
    age: int = Field(30, ge=0, le=120)
    isResident: bool = True

class SlabTaxResponse(RegimeTaxResponse):
    assessmentYear: str

# ── 2. Capital gains  (/calculators/capital-gains) ───────────────────────

class CapitalGainsRequest(BaseModel):
    assetType: AssetType
    acquisitionDate: date
    disposalDate: date
    purchasePrice: Amount = Field(0.0, ge=0)
    salePrice: Amount = Field(0.0, ge=0)
    expenses: Amount = Field(0.0, ge=0, description="Transfer expenses and cost of improvement")
    purchaseFy: Optional[str] = Field(None, pattern=_YEAR_PATTERN, description="Overrides the FY derived from acquisitionDate")
    saleFy: Optional[str] = Field(None, pattern=_YEAR_PATTERN, description="Overrides the FY derived from disposalDate")
    otherIncome: Amount = Field(0.0, description="Filer's other taxable income")
    includeOtherIncome: bool = Field(False, description="Integrate slab-rate gains with other income")
    assessmentYear: Optional[str] = Field(None, pattern=_YEAR_PATTERN)
    regime: RegimeName = RegimeName.OLD

    def to_input(self) -> CapitalGainInput:
        return CapitalGainInput(
            asset_type=self.assetType,
            acquisition_date=self.acquisitionDate,
            disposal_date=self.disposalDate,
            purchase_price=self.purchasePrice,
            sale_price=self.salePrice,
            expenses=self.expenses,
            purchase_fy=self.purchaseFy,
            sale_fy=self.saleFy,
        )

class CapitalGainsResponse(BaseModel):
    assetType: AssetType
    gainType: GainType
    holdingDays: int
    purchaseFy: str
    saleFy: str
    capitalGain: float
    indexedCost: float = Field(..., description="Cost used for the gain (indexed when applicable)")
    taxableGain: float
    taxRate: float
    taxAmount: float
    surcharge: float
    cess: float
    totalTax: float
    approximatedMarginalRate: bool

    @classmethod
    def from_result(cls, result: CapitalGainResult) -> "CapitalGainsResponse":
        return cls(
            assetType=result.asset_type,
            gainType=result.gain_type,
            holdingDays=result.holding_days,
            purchaseFy=result.purchase_fy,
            saleFy=result.sale_fy,
            capitalGain=result.capital_gain,
            indexedCost=result.indexed_cost,
            taxableGain=result.taxable_gain,
            taxRate=result.tax_rate,
            taxAmount=result.tax_amount,
            surcharge=result.surcharge,
            cess=result.cess,
            totalTax=result.total_tax,
            approximatedMarginalRate=result.approximated_marginal_rate,
        )

# ── 3. Tax summary / regime comparison ───────────────────────────────────

class IncomePayload(BaseModel):
    salary: Amount = 0.0
    housePropertyIncome: Amount = Field(0.0, description="Can be negative")
    shortTermCapitalGains: Amount = 0.0
    longTermCapitalGains: Amount = 0.0
    businessIncome: Amount = 0.0
    interestIncome: Amount = 0.0
    dividendIncome: Amount = 0.0
    otherSources: Amount = 0.0

    def to_income_data(self) -> IncomeData:
        return IncomeData(
            salary=self.salary,
            house_property=self.housePropertyIncome,
            short_term_capital_gains=self.shortTermCapitalGains,
            long_term_capital_gains=self.longTermCapitalGains,
            business=self.businessIncome,
            interest=self.interestIncome,
            dividend=self.dividendIncome,
            other_sources=self.otherSources,
        )

class DeductionsPayload(BaseModel):
    section80C: Amount = Field(0.0, description="Capped at ₹1,50,000")
    section80D: Amount = Field(0.0, description="Capped at ₹25,000 (₹50,000 from age 60)")
    otherDeductions: Amount = 0.0

class TaxPaidPayload(BaseModel):
    tds: Amount = 0.0
    advanceTax: Amount = 0.0
    selfAssessmentTax: Amount = 0.0

    def to_tax_paid(self) -> TaxPaid:
        return TaxPaid(
            tds=self.tds,
            advance_tax=self.advanceTax,
            self_assessment_tax=self.selfAssessmentTax,
        )

class RegimeComparisonRequest(BaseModel):
    assessmentYear: Optional[str] = Field(None, pattern=_YEAR_PATTERN)
    age: int = Field(40, ge=0, le=120)
    isResident: bool = True
    income: IncomePayload = Field(default_factory=IncomePayload)
    deductions: DeductionsPayload = Field(default_factory=DeductionsPayload)

class TaxSummaryRequest(RegimeComparisonRequest):
    taxPaid: TaxPaidPayload = Field(default_factory=TaxPaidPayload)
    taxRegime: Optional[RegimeName] = Field(None, description="Defaults to the recommended regime")

class RegimeOutcomeResponse(BaseModel):
    regime: RegimeName
    standardDeduction: float
    chapterVIADeductions: float
    totalDeductions: float
    taxableIncome: float
    tax: RegimeTaxResponse

    @classmethod
    def from_outcome(cls, outcome: RegimeOutcome) -> "RegimeOutcomeResponse":
        return cls(
            regime=outcome.regime,
            standardDeduction=outcome.standard_deduction,
            chapterVIADeductions=outcome.chapter_via_deductions,
            totalDeductions=outcome.total_deductions,
            taxableIncome=outcome.taxable_income,
            tax=RegimeTaxResponse.from_regime_tax(outcome.tax),
        )

class RegimeComparisonResponse(BaseModel):
    assessmentYear: str
    totalIncome: float
    old: RegimeOutcomeResponse
    new: RegimeOutcomeResponse
    recommendedRegime: RegimeName
    savings: float = Field(..., description="Tax saved by the recommended regime")

    @classmethod
    def from_comparison(cls, comparison: RegimeComparison) -> "RegimeComparisonResponse":
        return cls(
            assessmentYear=comparison.assessment_year,
            totalIncome=comparison.total_income,
            old=RegimeOutcomeResponse.from_outcome(comparison.old),
            new=RegimeOutcomeResponse.from_outcome(comparison.new),
            recommendedRegime=comparison.recommended_regime,
            savings=comparison.savings,
        )

class TaxSummaryResponse(BaseModel):
    assessmentYear: str
    taxRegime: RegimeName
    recommendedRegime: RegimeName
    totalIncome: float
    salaryIncome: float
    housePropertyIncome: float
    capitalGainsIncome: float
    otherIncome: float
    standardDeduction: float
    deductions80C: float
    deductions80D: float
    otherDeductions: float
    totalDeductions: float
    taxableIncome: float
    taxBeforeRebate: float
    rebateAmount: float
    surchargeAmount: float
    cessAmount: float
    estimatedTax: float
    tdsAmount: float
    advanceTaxPaid: float
    selfAssessmentTaxPaid: float
    totalTaxPaid: float
    taxPayable: float
    refundDue: float
    comparison: RegimeComparisonResponse

    @classmethod
    def from_summary(cls, summary: TaxSummary) -> "TaxSummaryResponse":
        return cls(
            assessmentYear=summary.assessment_year,
            taxRegime=summary.tax_regime,
            recommendedRegime=summary.recommended_regime,
            totalIncome=summary.total_income,
            salaryIncome=summary.salary_income,
            housePropertyIncome=summary.house_property_income,
            capitalGainsIncome=summary.capital_gains_income,
            otherIncome=summary.other_income,
            standardDeduction=summary.standard_deduction,
            deductions80C=summary.deductions_80c,
            deductions80D=summary.deductions_80d,
            otherDeductions=summary.other_deductions,
            totalDeductions=summary.total_deductions,
            taxableIncome=summary.taxable_income,
            taxBeforeRebate=summary.tax_before_rebate,
            rebateAmount=summary.rebate_amount,
            surchargeAmount=summary.surcharge_amount,
            cessAmount=summary.cess_amount,
            estimatedTax=summary.estimated_tax,
            tdsAmount=summary.tds_amount,
            advanceTaxPaid=summary.advance_tax_paid,
            selfAssessmentTaxPaid=summary.self_assessment_tax_paid,
            totalTaxPaid=summary.total_tax_paid,
            taxPayable=summary.tax_payable,
            refundDue=summary.refund_due,
            comparison=RegimeComparisonResponse.from_comparison(summary.comparison),
        )

# ── 4. Reference data ────────────────────────────────────────────────────

class RegimeInfo(BaseModel):
    name: str
    regime: RegimeName
    description: str
    applicableFrom: str
    isDefault: bool
    slabs: List[SlabLine]
    surcharge: Dict[str, float] = Field(default_factory=dict)
    cess: float
    standardDeduction: float
    deductions: List[str]

    @classmethod
    def from_regime(cls, regime: TaxRegime) -> "RegimeInfo":
        return cls(
            name=regime.name,
            regime=regime.regime,
            description=regime.description,
            applicableFrom=regime.applicable_from,
            isDefault=regime.is_default,
            slabs=[SlabLine.from_slab(slab) for slab in regime.slabs],
            surcharge=dict(regime.surcharge or {}),
            cess=regime.cess,
            standardDeduction=regime.standard_deduction,
            deductions=list(regime.deductions),
        )

class TaxSlabsResponse(BaseModel):
    assessmentYear: str
    regimes: List[RegimeInfo]
    seniorCitizenSlabs: List[SlabLine]
    superSeniorCitizenSlabs: List[SlabLine]

class CiiResponse(BaseModel):
    baseYear: str
    values: Dict[str, int]

class IndexedCostResponse(BaseModel):
    cost: float
    purchaseFy: str
    saleFy: str
    indexedCost: float

# ── 5. Health / performance ──────────────────────────────────────────────

class HealthResponse(BaseModel):
    status: str
    port: int
    defaultAssessmentYear: str
    assessmentYears: List[str]

class PerformanceResponse(BaseModel):
    time: str = Field(..., description="Last response time (HH:mm:ss.SSS)")
    uptime: str = Field(..., description="Time since startup (HH:mm:ss.SSS)")
    memory: str = Field(..., description="Current memory usage (e.g. '123.45 MB')")
    threads: int = Field(..., description="Number of active threads")
