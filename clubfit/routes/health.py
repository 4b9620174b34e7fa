"""
Health check route for the ClubFit backend.

PUBLIC endpoint providing a simple status check for load balancers,
monitoring, and deployment verification.
"""

import logging

from fastapi import APIRouter

from clubfit.schemas.health import HealthResponse

logger = logging.getLogger(__name__)

# Create router with no prefix (mounted at root level in main.py)
router = APIRouter(tags=["system"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check endpoint",
    description="Returns a simple status indicator for monitoring and load balancing.",
    status_code=200,
)
async def health_check() -> HealthResponse:
    """
    Public health check endpoint.

    Example response:
        {
            "status": "ok",
            "service": "clubfit-backend"
        }
    """
    logger.debug("Health check endpoint called")

    return HealthResponse(status="ok")
