"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from erdiagram import __version__
from erdiagram.api.models import HealthResponse
from erdiagram.utils.timing import get_latency_tracker

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint.

    Returns service status and the engine's recorded latencies.
    """
    return HealthResponse(
        status="healthy",
        version=__version__,
        timings=get_latency_tracker().get_stats(),
    )
