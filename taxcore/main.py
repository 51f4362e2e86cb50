"""FastAPI application entry point.

Serves the income-tax calculators (slab tax, capital gains, tax summary,
regime comparison) and the reference tables behind them.

Usage:
    uvicorn taxcore.main:app --host 0.0.0.0 --port 5478 --reload
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from taxcore.config import settings
from taxcore.routers import calculators, health, reference
from taxcore.routers.health import mark_started, record_elapsed
from taxcore.tables.slabs import TAX_SLABS_BY_YEAR, default_tax_slabs

# ── Logging ──────────────────────────────────────────────────────────────
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


# ── Lifespan (startup + shutdown) ────────────────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "Tax tables loaded for AY %s (default %s); listening on port %s",
        ", ".join(sorted(TAX_SLABS_BY_YEAR)),
        default_tax_slabs().assessment_year,
        settings.APP_PORT,
    )
    mark_started()
    yield
    logger.info("Tax Computation API stopped.")


# ── Application factory ──────────────────────────────────────────────────

app = FastAPI(
    title="Tax Computation API",
    description=(
        "Indian personal income-tax computations: slab tax with surcharge "
        "and cess, capital gains with indexation and exemptions, old vs new "
        "regime comparison and the aggregate return summary."
    ),
    version="1.0.0",
    lifespan=lifespan,
)

# ── CORS ─────────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


# ── Request timing middleware ────────────────────────────────────────────

@app.middleware("http")
async def timing_middleware(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    record_elapsed(elapsed_ms)
    response.headers["X-Response-Time-Ms"] = f"{elapsed_ms:.2f}"
    logger.debug("%s %s → %s in %.2f ms", request.method, request.url.path, response.status_code, elapsed_ms)
    return response


# ── Exception handlers ───────────────────────────────────────────────────

@app.exception_handler(ValueError)
async def computation_error_handler(request: Request, exc: ValueError):
    """Invalid tax inputs that slipped past the routers' own checks."""
    logger.warning("Rejected %s: %s", request.url.path, exc)
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error("Tax computation failed on %s: %s", request.url.path, exc, exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Tax computation failed. Please check the server logs."},
    )


# ── Register routers ─────────────────────────────────────────────────────
app.include_router(calculators.router)
app.include_router(reference.router)
app.include_router(health.router)


# ── Dev entry point ──────────────────────────────────────────────────────

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "taxcore.main:app",
        host=settings.APP_HOST,
        port=settings.APP_PORT,
        reload=True,
    )
