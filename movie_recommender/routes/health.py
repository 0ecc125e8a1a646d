"""
Health check routes for the Movie Recommender backend.

These endpoints are PUBLIC and provide a simple status check for load
balancers, monitoring, and deployment verification.
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from movie_recommender.schemas.health import HealthResponse
from movie_recommender.utils.logging import get_logger

logger = get_logger(__name__)

# Create router with no prefix (mounted at root level in main.py)
router = APIRouter(tags=["system"])


@router.get("/", response_class=PlainTextResponse, summary="Server banner")
async def root() -> str:
    """Plain-text banner confirming the server is up."""
    return "Server is running successfully"


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check endpoint",
    description=(
        "Public health check endpoint (no authentication required). "
        "Returns a simple status indicator for monitoring and load balancing."
    ),
    status_code=200,
)
async def health_check() -> HealthResponse:
    """
    Public health check endpoint.

    Example response:
        {
            "status": "ok"
        }
    """
    logger.debug("Health check endpoint called")

    return HealthResponse(status="ok")
