"""
Health check endpoint schemas.
"""

from typing import List

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response model for GET /health (public, no auth)."""

    status: str = Field(
        default="ok",
        description="Health status of the API (always 'ok' if responding)",
        examples=["ok"]
    )
    service: str = "spontaneity-engine-backend"
    adapters: List[str] = Field(
        default_factory=list,
        description="Providers with a configured API key, in default priority order",
        examples=[["gemini", "openai"]]
    )
