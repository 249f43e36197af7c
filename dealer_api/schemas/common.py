"""
Dealerships API — Shared Response Schemas
===========================================

What:  Error and health-check response models used across routes.
"""

from pydantic import BaseModel, Field

# Range of a BSON int64; integer ids outside it cannot be stored or queried
BSON_INT_MIN = -(2**63)
BSON_INT_MAX = 2**63 - 1


class ErrorResponse(BaseModel):
    """
    What:  Error payload returned by every failing endpoint.
    Why:   One flat shape the frontend can rely on: `{"error": "<message>"}`.
           The request id travels in the X-Request-ID header instead.

    Example:
        {"error": "Dealer not found"}
    """
    error: str = Field(description="Human-readable error message")


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and store status.
    Who:   Returned by GET /health for container health checks and monitoring.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Store connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
