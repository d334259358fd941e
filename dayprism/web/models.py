"""
Web API models.

Request/response envelopes used by the FastAPI routes.
"""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(UTC)


class APIResponse(BaseModel):
    """Standard API response envelope."""

    success: bool = Field(..., description="Whether the request succeeded")
    data: Any | None = Field(None, description="Response payload")
    message: str | None = Field(None, description="Human readable message")
    timestamp: datetime = Field(default_factory=_utcnow, description="Response timestamp")
    request_id: str | None = Field(None, description="Request id for tracing")


class ErrorResponse(BaseModel):
    """Error response envelope."""

    success: bool = Field(False, description="Always false")
    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Error message")
    details: dict[str, Any] | None = Field(None, description="Error details")
    timestamp: datetime = Field(default_factory=_utcnow, description="Error timestamp")
    request_id: str | None = Field(None, description="Request id for tracing")


class HealthStatus(BaseModel):
    """Health check payload."""

    status: str = Field(..., description="Service status")
    version: str = Field(..., description="Service version")
    uptime_seconds: float = Field(..., description="Seconds since startup")
    api_key_configured: bool = Field(..., description="Whether an upstream API key is available")
