"""Service health and runtime metrics:
    GET  /health
    GET  /performance
"""

from __future__ import annotations

import logging
import os
import threading
import time

import psutil
from fastapi import APIRouter

from taxcore.config import settings
from taxcore.models.schemas import HealthResponse, PerformanceResponse
from taxcore.tables.slabs import TAX_SLABS_BY_YEAR, default_tax_slabs

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# ── Runtime counters ──────────────────────────────────────────────────────
_started_at: float = time.monotonic()
_last_elapsed_ms: float = 0.0  # set by the timing middleware in main


def mark_started() -> None:
    """Anchor the uptime clock; called from the app lifespan."""
    global _started_at
    _started_at = time.monotonic()


def record_elapsed(elapsed_ms: float) -> None:
    global _last_elapsed_ms
    _last_elapsed_ms = elapsed_ms


def format_elapsed(milliseconds: float) -> str:
    """Format milliseconds as HH:mm:ss.SSS."""
    total_ms = int(milliseconds)
    hours, remainder = divmod(total_ms // 1000, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}.{total_ms % 1000:03d}"


def _memory_mb() -> str:
    rss = psutil.Process(os.getpid()).memory_info().rss
    return f"{rss / (1024 * 1024):.2f} MB"


# ── Endpoints ─────────────────────────────────────────────────────────────

@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    return HealthResponse(
        status="healthy",
        port=settings.APP_PORT,
        defaultAssessmentYear=default_tax_slabs().assessment_year,
        assessmentYears=sorted(TAX_SLABS_BY_YEAR),
    )


@router.get(
    "/performance",
    response_model=PerformanceResponse,
    summary="Runtime metrics of the tax API",
)
async def runtime_metrics() -> PerformanceResponse:
    """Last response time, uptime, memory usage and active thread count."""
    return PerformanceResponse(
        time=format_elapsed(_last_elapsed_ms),
        uptime=format_elapsed((time.monotonic() - _started_at) * 1000),
        memory=_memory_mb(),
        threads=threading.active_count(),
    )
