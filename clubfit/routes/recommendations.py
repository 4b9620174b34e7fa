"""
FastAPI routes for the club recommendation endpoint.

Endpoints:
- POST /api/recommend: Ranked iron recommendations for a player profile

The request is validated by UserInput (422 on bad input). Configuration is
checked before any external call; every other failure is reported as a
generic 500 so upstream error text never reaches the client.
"""

import logging
from typing import List

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from clubfit.config import settings
from clubfit.db.client import get_supabase_client
from clubfit.schemas.recommendations import (
    ErrorResponse,
    RecommendationResult,
    UserInput,
)
from clubfit.services.recommendation_service import get_club_recommendations
from clubfit.utils.errors import ServiceNotConfiguredError

logger = logging.getLogger(__name__)

REQUIRED_SETTINGS = ("GOOGLE_API_KEY", "SUPABASE_URL", "SUPABASE_KEY")
GENERIC_ERROR_MESSAGE = "Error processing your request."

router = APIRouter(
    prefix="/api",
    tags=["recommendations"]
)


def _error(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(message=message).model_dump(),
    )


@router.post(
    "/recommend",
    response_model=List[RecommendationResult],
    status_code=status.HTTP_200_OK,
    responses={500: {"model": ErrorResponse}},
    summary="Recommend golf irons",
    description="""
    Returns up to six catalog irons ranked for the player's handicap, goal
    and budget, each with a short explanation.

    **Flow:**
    1. Cached candidates are reused for non-personalized requests
    2. Otherwise Gemini suggests models, which are reconciled against the
       catalog (unknown models are added when image search is configured)
    3. Candidates are ranked deterministically and explained

    An empty list means no catalog club covers the handicap.
    """
)
async def recommend_clubs_endpoint(user_input: UserInput):
    """
    Recommendation endpoint.

    - Parse/Validate: Handled by Pydantic UserInput
    - Config check: Fails fast when Gemini or Supabase are not configured
    - Call service: Pipeline in recommendation_service
    - Map errors: Anything raised becomes a generic 500
    """
    logger.info(
        f"POST /api/recommend called (handicap={user_input.handicap}, "
        f"goal={user_input.goal}, budget={user_input.budget})"
    )

    missing = settings.missing_for(*REQUIRED_SETTINGS)
    if missing:
        logger.error(f"Recommendation service not configured: missing {', '.join(missing)}")
        return _error(str(ServiceNotConfiguredError(missing)))

    try:
        supabase_client = get_supabase_client()
        results = await get_club_recommendations(supabase_client, user_input)
    except Exception as e:
        logger.error(f"Recommendation pipeline failed: {e}", exc_info=True)
        return _error(GENERIC_ERROR_MESSAGE)

    logger.info(f"Returning {len(results)} recommendations")
    return results
