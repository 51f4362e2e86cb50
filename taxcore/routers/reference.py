"""Routers exposing the static tax tables:
    GET  /api/v1/reference/tax-slabs/{assessment_year}
    GET  /api/v1/reference/cii
    GET  /api/v1/reference/indexed-cost
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Query

from taxcore.config import settings
from taxcore.models.schemas import (
    CiiResponse,
    IndexedCostResponse,
    RegimeInfo,
    SlabLine,
    TaxSlabsResponse,
)
from taxcore.services.capital_gains_service import indexed_cost
from taxcore.tables.cii import CII_BASE_YEAR, COST_INFLATION_INDEX
from taxcore.tables.slabs import (
    SENIOR_CITIZEN_SLABS,
    SUPER_SENIOR_CITIZEN_SLABS,
    get_tax_slabs_by_year,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix=f"{settings.API_PREFIX}/reference",
    tags=["Reference"],
)


@router.get(
    "/tax-slabs/{assessment_year}",
    response_model=TaxSlabsResponse,
    summary="Slabs, surcharge and cess for an assessment year",
)
async def tax_slabs(assessment_year: str) -> TaxSlabsResponse:
    """Unknown years return the default assessment year's table."""
    year = get_tax_slabs_by_year(assessment_year)
    return TaxSlabsResponse(
        assessmentYear=year.assessment_year,
        regimes=[RegimeInfo.from_regime(regime) for regime in year.regimes],
        seniorCitizenSlabs=[SlabLine.from_slab(s) for s in SENIOR_CITIZEN_SLABS],
        superSeniorCitizenSlabs=[SlabLine.from_slab(s) for s in SUPER_SENIOR_CITIZEN_SLABS],
    )


@router.get("/cii", response_model=CiiResponse, summary="Cost Inflation Index table")
async def cii() -> CiiResponse:
    return CiiResponse(baseYear=CII_BASE_YEAR, values=dict(COST_INFLATION_INDEX))


@router.get(
    "/indexed-cost",
    response_model=IndexedCostResponse,
    summary="Indexed cost of acquisition",
)
async def indexed_cost_lookup(
    cost: float = Query(..., ge=0),
    purchaseFy: str = Query(..., pattern=r"^\d{4}-\d{2}$"),
    saleFy: str = Query(..., pattern=r"^\d{4}-\d{2}$"),
) -> IndexedCostResponse:
    """cost × CII(saleFy) / CII(purchaseFy), rounded to the rupee."""
    try:
        value = indexed_cost(cost, purchaseFy, saleFy)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return IndexedCostResponse(
        cost=cost, purchaseFy=purchaseFy, saleFy=saleFy, indexedCost=value
    )
