"""
Health check route for the Spontaneity Engine backend.

PUBLIC endpoint (no authentication) for load balancers and deployment
checks. Reports which providers are configured without exposing keys.
"""

from fastapi import APIRouter

from spontaneity.config import settings
from spontaneity.schemas.health import HealthResponse
from spontaneity.utils.logging import get_logger

logger = get_logger(__name__)

# Mounted at root level in main.py
router = APIRouter(tags=["system"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check endpoint",
    status_code=200,
)
async def health_check() -> HealthResponse:
    """
    Public health check endpoint.

    Example response:
        {
            "status": "ok",
            "service": "spontaneity-engine-backend",
            "adapters": ["gemini", "openai"]
        }
    """
    logger.debug("Health check endpoint called")

    adapters = []
    if settings.gemini_api_key():
        adapters.append("gemini")
    if settings.openai_api_key():
        adapters.append("openai")

    return HealthResponse(status="ok", adapters=adapters)
