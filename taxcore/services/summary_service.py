"""Aggregate tax summary and old-vs-new regime comparison.

    total income      = salary + house property + capital gains + other
    total deductions  = standard deduction (+ capped 80C / 80D / other in old regime)
    taxable income    = max(0, total income − total deductions)
    tax payable       = max(0, liability − tax paid)
    refund due        = max(0, tax paid − liability)
"""

from __future__ import annotations

import logging
from typing import Optional

from taxcore.config import settings
from taxcore.models.tax import (
    IncomeData,
    RegimeComparison,
    RegimeName,
    RegimeOutcome,
    TaxPaid,
    TaxRegime,
    TaxSummary,
)
from taxcore.services.slab_service import calculate_regime_tax
from taxcore.tables.slabs import get_tax_slabs_by_year
from taxcore.utils.helpers import round_currency

logger = logging.getLogger(__name__)


# ── Deductions ───────────────────────────────────────────────────────────

def cap_80c(amount: float) -> float:
    return min(max(0.0, amount), settings.MAX_80C_DEDUCTION)


def cap_80d(amount: float, age: int = 40) -> float:
    limit = (
        settings.MAX_80D_DEDUCTION_SENIOR
        if age >= settings.SENIOR_CITIZEN_AGE
        else settings.MAX_80D_DEDUCTION
    )
    return min(max(0.0, amount), limit)


def standard_deduction(salary: float, regime: TaxRegime) -> float:
    """Allowed once, only against salary, never above the salary itself."""
    if salary <= 0:
        return 0.0
    return min(regime.standard_deduction, salary)


def _regime_outcome(
    income: IncomeData,
    chapter_via: float,
    regime: TaxRegime,
    age: int,
    is_resident: bool,
) -> RegimeOutcome:
    std = standard_deduction(income.salary, regime)
    allowed = chapter_via if regime.chapter_via_allowed else 0.0
    total_deductions = std + allowed
    taxable = max(0.0, income.total - total_deductions)

    return RegimeOutcome(
        regime=regime.regime,
        standard_deduction=round_currency(std),
        chapter_via_deductions=round_currency(allowed),
        total_deductions=round_currency(total_deductions),
        taxable_income=round_currency(taxable),
        tax=calculate_regime_tax(taxable, regime, age=age, is_resident=is_resident),
    )


# ── Public API ────────────────────────────────────────────────────────────

def compare_regimes(
    income: IncomeData,
    deductions_80c: float = 0.0,
    deductions_80d: float = 0.0,
    other_deductions: float = 0.0,
    assessment_year: Optional[str] = None,
    age: int = 40,
    is_resident: bool = True,
) -> RegimeComparison:
    """Compute both regimes and recommend the cheaper one (ties → new)."""
    year = get_tax_slabs_by_year(assessment_year or settings.DEFAULT_ASSESSMENT_YEAR)
    chapter_via = cap_80c(deductions_80c) + cap_80d(deductions_80d, age) + max(0.0, other_deductions)

    old = _regime_outcome(income, chapter_via, year.get(RegimeName.OLD), age, is_resident)
    new = _regime_outcome(income, chapter_via, year.get(RegimeName.NEW), age, is_resident)

    recommended = RegimeName.NEW if new.tax.total_tax <= old.tax.total_tax else RegimeName.OLD

    logger.info(
        "AY %s regime comparison: old=%.2f new=%.2f → %s",
        year.assessment_year, old.tax.total_tax, new.tax.total_tax, recommended.value,
    )

    return RegimeComparison(
        assessment_year=year.assessment_year,
        total_income=round_currency(income.total),
        old=old,
        new=new,
        recommended_regime=recommended,
        savings=round_currency(abs(old.tax.total_tax - new.tax.total_tax)),
    )


def calculate_tax_summary(
    income: IncomeData,
    deductions_80c: float = 0.0,
    deductions_80d: float = 0.0,
    other_deductions: float = 0.0,
    tax_paid: Optional[TaxPaid] = None,
    assessment_year: Optional[str] = None,
    tax_regime: Optional[RegimeName] = None,
    age: int = 40,
    is_resident: bool = True,
) -> TaxSummary:
    """Full summary for a filer.

    Headline figures follow *tax_regime* when given, otherwise the
    recommended regime.  The comparison of both regimes is always attached.
    """
    paid = tax_paid or TaxPaid()
    comparison = compare_regimes(
        income,
        deductions_80c=deductions_80c,
        deductions_80d=deductions_80d,
        other_deductions=other_deductions,
        assessment_year=assessment_year,
        age=age,
        is_resident=is_resident,
    )

    chosen = tax_regime or comparison.recommended_regime
    outcome = comparison.outcome(chosen)
    liability = outcome.tax.total_tax
    total_paid = paid.total

    section_80c = cap_80c(deductions_80c) if outcome.chapter_via_deductions else 0.0
    section_80d = cap_80d(deductions_80d, age) if outcome.chapter_via_deductions else 0.0
    other = max(0.0, other_deductions) if outcome.chapter_via_deductions else 0.0

    return TaxSummary(
        assessment_year=comparison.assessment_year,
        tax_regime=chosen,
        recommended_regime=comparison.recommended_regime,
        total_income=round_currency(income.total),
        salary_income=round_currency(income.salary),
        house_property_income=round_currency(income.house_property),
        capital_gains_income=round_currency(income.capital_gains),
        other_income=round_currency(income.other),
        standard_deduction=outcome.standard_deduction,
        deductions_80c=round_currency(section_80c),
        deductions_80d=round_currency(section_80d),
        other_deductions=round_currency(other),
        total_deductions=outcome.total_deductions,
        taxable_income=outcome.taxable_income,
        tax_before_rebate=outcome.tax.tax_amount,
        rebate_amount=outcome.tax.rebate,
        surcharge_amount=outcome.tax.surcharge,
        cess_amount=outcome.tax.cess,
        estimated_tax=liability,
        tds_amount=round_currency(paid.tds),
        advance_tax_paid=round_currency(paid.advance_tax),
        self_assessment_tax_paid=round_currency(paid.self_assessment_tax),
        total_tax_paid=round_currency(total_paid),
        tax_payable=round_currency(max(0.0, liability - total_paid)),
        refund_due=round_currency(max(0.0, total_paid - liability)),
        comparison=comparison,
    )
