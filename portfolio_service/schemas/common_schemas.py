# schemas/common_schemas.py

"""
Common API schemas used across the service.
"""

from datetime import datetime, timezone
from typing import Optional, Dict, Any
from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class HealthCheckSchema(BaseModel):
    """Health check response DTO."""

    status: str = Field(..., description="Service health status")
    service: str = Field(..., description="Service name")
    version: str = Field("1.0.0", description="Service version")
    timestamp: datetime = Field(default_factory=_utcnow)
    components: Dict[str, str] = Field(
        default_factory=dict, description="Component health status"
    )
    uptime: Optional[float] = Field(None, description="Service uptime in seconds")


class ErrorResponseSchema(BaseModel):
    """Generic error response DTO."""

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Error message")
    details: Optional[Dict[str, Any]] = Field(
        None, description="Additional error details"
    )
    timestamp: datetime = Field(default_factory=_utcnow)
