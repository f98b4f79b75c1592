"""
WordTally Backend — Shared Response Schemas
============================================

What:  Envelope models shared by every router.
Why:   Every response carries a `success` flag; failures add `error` and a
       human-readable `message`. Keeping the envelope in one place keeps the
       OpenAPI docs and the exception handlers in agreement.
"""

from typing import Optional

from pydantic import BaseModel, Field


class SuccessResponse(BaseModel):
    """Bare acknowledgement for mutations that return no data."""
    success: bool = Field(default=True)


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "success": false,
            "error": "conflict",
            "message": "URL already counted",
            "request_id": "a1b2c3d4"
        }
    """
    success: bool = Field(default=False)
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and dependency status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
