"""Liveness and readiness endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter, Response, status
from pydantic import BaseModel, Field

from formatconverter import __version__
from formatconverter.api.dependencies import Dispatcher
from formatconverter.config import get_settings

router = APIRouter(prefix="/health", tags=["health"])


class ServiceStatus(BaseModel):
    """Liveness payload."""

    status: str
    version: str = __version__
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ReadinessStatus(ServiceStatus):
    """Readiness payload: what this instance will accept."""

    conversions: list[str]
    max_upload_size_mb: int


@router.get("", response_model=ServiceStatus, summary="Liveness check")
async def health_check() -> ServiceStatus:
    return ServiceStatus(status="healthy")


@router.get(
    "/ready",
    response_model=ReadinessStatus,
    summary="Readiness check",
    responses={503: {"description": "No conversions registered"}},
)
async def readiness_check(dispatcher: Dispatcher, response: Response) -> ReadinessStatus:
    """Ready once at least one conversion route is registered.

    Example:
        GET /health/ready
        {"status": "ready", "conversions": ["csv-to-excel", ...],
         "max_upload_size_mb": 1024, ...}
    """
    conversions = dispatcher.list_supported_formats()
    if not conversions:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return ReadinessStatus(
        status="ready" if conversions else "not_ready",
        conversions=conversions,
        max_upload_size_mb=get_settings().max_upload_size_mb,
    )
