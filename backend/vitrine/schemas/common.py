"""Schemas shared by every route: plain messages, errors, health."""

from typing import Optional

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Body of every create/delete/seed acknowledgement."""
    message: str = Field(description="Human-readable result")


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "invalid_token",
            "message": "Failed to authenticate token",
            "request_id": "3f2a9c1e"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and load balancer probes."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
