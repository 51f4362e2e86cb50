# Test type: Configuration
# Validation to be executed: Shared fixtures for all test modules
# Command: pytest test/ -v (this file is auto-loaded by pytest)

"""Shared pytest fixtures for the Tax Computation API test suite."""

from __future__ import annotations

from datetime import date

import pytest
from httpx import ASGITransport, AsyncClient

from taxcore.main import app
from taxcore.models.tax import AssetType, CapitalGainInput, IncomeData, RegimeName
from taxcore.tables.slabs import TAX_SLABS_2024_25


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
async def client():
    """Async HTTP client bound to the FastAPI app (no real server needed)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


# ── Rate tables ──────────────────────────────────────────────────────────

@pytest.fixture
def old_regime():
    """AY 2024-25 old regime: 0 / 5 / 20 / 30 % at 2.5 L, 5 L, 10 L."""
    return TAX_SLABS_2024_25.get(RegimeName.OLD)


@pytest.fixture
def new_regime():
    """AY 2024-25 new regime: 0 / 5 / 10 / 15 / 20 / 30 % in 3 L steps."""
    return TAX_SLABS_2024_25.get(RegimeName.NEW)


@pytest.fixture
def fixture_cii():
    """Substitute CII table giving a clean 1.2 indexation ratio."""
    return {"2020-21": 100, "2023-24": 120}


# ── Capital-gains scenarios ──────────────────────────────────────────────

@pytest.fixture
def equity_long_term():
    """Equity held one year and a day (366 days across Feb 2024)."""
    return CapitalGainInput(
        asset_type=AssetType.EQUITY,
        acquisition_date=date(2023, 4, 10),
        disposal_date=date(2024, 4, 10),
        purchase_price=100_000,
        sale_price=250_000,
        expenses=1_000,
    )


@pytest.fixture
def debt_long_term():
    """Debt fund held a little over three years (1125 days)."""
    return CapitalGainInput(
        asset_type=AssetType.DEBT,
        acquisition_date=date(2020, 6, 1),
        disposal_date=date(2023, 7, 1),
        purchase_price=100_000,
        sale_price=200_000,
        expenses=0,
    )


# ── Summary inputs ───────────────────────────────────────────────────────

@pytest.fixture
def salaried_10l():
    return IncomeData(salary=1_000_000)
