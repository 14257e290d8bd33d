"""Probe response schemas."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness probe response."""

    status: str = Field(..., description="Always 'healthy' while the process answers")
    service: str
    timestamp: str = Field(..., description="ISO-8601 UTC time of the response")
    uptime: float = Field(..., ge=0, description="Seconds since the service started")


class ReadinessResponse(BaseModel):
    """Readiness probe response."""

    status: str = Field(..., description="'ready', or 'shutting down' while draining")
    service: str
    timestamp: str
