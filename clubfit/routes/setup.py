"""
Administrative catalog setup route.

Endpoints:
- POST /api/setup: Replace the club catalog with the seed list

Reseeding changes every club id, so the recommendation cache is cleared in
the same operation.
"""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from clubfit.config import settings
from clubfit.data import SEED_CLUBS
from clubfit.db.client import get_supabase_client
from clubfit.schemas.recommendations import ErrorResponse
from clubfit.schemas.setup import SetupResponse
from clubfit.services.catalog_service import reseed_catalog

logger = logging.getLogger(__name__)

NOT_CONFIGURED_MESSAGE = "Database connection not configured."
SUCCESS_MESSAGE = "Database setup completed successfully"
FAILURE_MESSAGE = "Database setup failed. Please check the logs."

router = APIRouter(
    prefix="/api",
    tags=["setup"]
)


def _error(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(message=message).model_dump(),
    )


@router.post(
    "/setup",
    response_model=SetupResponse,
    status_code=status.HTTP_200_OK,
    responses={500: {"model": ErrorResponse}},
    summary="Reseed the club catalog",
    description="Deletes every club (and cached recommendation) and inserts the seed catalog.",
)
async def setup_catalog_endpoint():
    logger.info("POST /api/setup called")

    if settings.missing_for("SUPABASE_URL", "SUPABASE_KEY"):
        logger.error("Database setup requested without SUPABASE_URL/SUPABASE_KEY")
        return _error(NOT_CONFIGURED_MESSAGE)

    try:
        supabase_client = get_supabase_client()
        inserted = await reseed_catalog(supabase_client, SEED_CLUBS)
    except Exception as e:
        logger.error(f"Database setup failed: {e}", exc_info=True)
        return _error(FAILURE_MESSAGE)

    logger.info(f"Catalog reseeded with {inserted} clubs")
    return SetupResponse(message=SUCCESS_MESSAGE, clubs_inserted=inserted)
