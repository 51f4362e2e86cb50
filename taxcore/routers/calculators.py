"""Routers for calculator endpoints:
    POST  /api/v1/calculators/slab-tax
    POST  /api/v1/calculators/capital-gains
    POST  /api/v1/calculators/tax-summary
    POST  /api/v1/calculators/regime-comparison
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from taxcore.config import settings
from taxcore.models.schemas import (
    CapitalGainsRequest,
    CapitalGainsResponse,
    RegimeComparisonRequest,
    RegimeComparisonResponse,
    SlabTaxRequest,
    SlabTaxResponse,
    TaxSummaryRequest,
    TaxSummaryResponse,
)
from taxcore.services.capital_gains_service import compute_capital_gains_tax
from taxcore.services.slab_service import calculate_regime_tax
from taxcore.services.summary_service import calculate_tax_summary, compare_regimes
from taxcore.tables.slabs import get_tax_slabs_by_year

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix=f"{settings.API_PREFIX}/calculators",
    tags=["Calculators"],
)

# ── 1. Slab tax ──────────────────────────────────────────────────────────

@router.post(
    "/slab-tax",
    response_model=SlabTaxResponse,
    summary="Income tax on a taxable income under one regime",
)
async def slab_tax(body: SlabTaxRequest) -> SlabTaxResponse:
    """Slab tax with age-based variants, 87A rebate, surcharge and cess."""
    year = get_tax_slabs_by_year(body.assessmentYear)
    result = calculate_regime_tax(
        body.income,
        year.get(body.regime),
        age=body.age,
        is_resident=body.isResident,
    )
    return SlabTaxResponse.from_regime_tax(result, assessmentYear=year.assessment_year)

# ── 2. Capital gains ─────────────────────────────────────────────────────

@router.post(
    "/capital-gains",
    response_model=CapitalGainsResponse,
    summary="Capital-gains tax on a single disposal",
)
async def capital_gains(body: CapitalGainsRequest) -> CapitalGainsResponse:
    """Classify the gain, apply indexation / exemption and compute the tax.

    Short-term gains on debt, property and gold are taxed at slab rates:
    integrated with ``otherIncome`` when ``includeOtherIncome`` is set,
    otherwise at the marginal rate of ``otherIncome``.
    """
    try:
        result = compute_capital_gains_tax(
            body.to_input(),
            other_income=body.otherIncome,
            include_other_income=body.includeOtherIncome,
            assessment_year=body.assessmentYear,
            regime=body.regime,
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return CapitalGainsResponse.from_result(result)

# ── 3. Tax summary ───────────────────────────────────────────────────────

@router.post(
    "/tax-summary",
    response_model=TaxSummaryResponse,
    summary="Income, deductions, liability and payable / refund for a return",
)
async def tax_summary(body: TaxSummaryRequest) -> TaxSummaryResponse:
    """Aggregate the filer's income and deductions and compute the liability.

    Both regimes are evaluated; headline figures use ``taxRegime`` when
    supplied, otherwise the recommended regime.
    """
    summary = calculate_tax_summary(
        body.income.to_income_data(),
        deductions_80c=body.deductions.section80C,
        deductions_80d=body.deductions.section80D,
        other_deductions=body.deductions.otherDeductions,
        tax_paid=body.taxPaid.to_tax_paid(),
        assessment_year=body.assessmentYear,
        tax_regime=body.taxRegime,
        age=body.age,
        is_resident=body.isResident,
    )
    return TaxSummaryResponse.from_summary(summary)

# ── 4. Regime comparison ─────────────────────────────────────────────────

@router.post(
    "/regime-comparison",
    response_model=RegimeComparisonResponse,
    summary="Old vs new regime comparison",
)
async def regime_comparison(body: RegimeComparisonRequest) -> RegimeComparisonResponse:
    """Tax under both regimes and the recommended (cheaper) one."""
    comparison = compare_regimes(
        body.income.to_income_data(),
        deductions_80c=body.deductions.section80C,
        deductions_80d=body.deductions.section80D,
        other_deductions=body.deductions.otherDeductions,
        assessment_year=body.assessmentYear,
        age=body.age,
        is_resident=body.isResident,
    )
    return RegimeComparisonResponse.from_comparison(comparison)
