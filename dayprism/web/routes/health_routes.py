"""
Health check routes.
"""

import time

from fastapi import APIRouter, Request
from loguru import logger

from dayprism import __version__
from dayprism.web.models import APIResponse, HealthStatus
from dayprism.web.utils import get_request_id

router = APIRouter()


@router.get("/health", response_model=APIResponse)
async def health_check(request: Request) -> APIResponse:
    """
    Liveness check.

    Also reports whether an upstream API key is configured; a missing key
    does not make the service unhealthy, requests fail with 400 instead.
    """
    started_at: float = request.app.state.started_at
    orchestrator = request.app.state.orchestrator
    health = HealthStatus(
        status="healthy",
        version=__version__,
        uptime_seconds=round(time.monotonic() - started_at, 3),
        api_key_configured=bool((orchestrator.api_key or "").strip()),
    )
    logger.info("Health check completed", endpoint="/health", status=health.status)
    return APIResponse(
        success=True,
        data=health.model_dump(),
        message="Health check completed",
        request_id=get_request_id(request),
    )
