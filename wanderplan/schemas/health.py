from typing import Any

from pydantic import BaseModel, Field


class HealthCheckResponse(BaseModel):
    """Health check response model."""

    version: str = Field(..., description="Application version")
    status: str = Field(..., description="Overall service status")
    timestamp: str = Field(..., description="Check timestamp")
    ai_client: str = Field(..., description="AI client status")
    ai_circuit_breaker: dict[str, Any] | None = Field(None, description="AI circuit breaker state")
    has_itinerary: bool = Field(..., description="Whether an itinerary is installed")
