"""
Recommendation Service - catalog + Gemini + deterministic ranking

Pipeline for one POST /api/recommend call:
1. Cache lookup (eligible requests only) -> candidate club ids
2. On miss: load catalog, ask Gemini for model names, reconcile names
   against the catalog, enrich unmatched names (when SERPAPI_API_KEY is set),
   store the candidate ids in the cache
3. Rank candidates in catalog order with the engine, so ties follow the
   catalog; if none fits the handicap, rank the whole catalog instead
4. Fetch explanations for the ranked clubs concurrently

Errors are not caught here: the route maps anything raised to HTTP 500.
"""

import asyncio
import logging
from typing import List

from supabase import Client

from clubfit.agents.club_advisor import explain_recommendation, suggest_club_models
from clubfit.config import settings
from clubfit.schemas.clubs import Club
from clubfit.schemas.recommendations import RecommendationResult, UserInput
from clubfit.services.cache_service import (
    build_cache_key,
    get_cached_club_ids,
    is_cacheable,
    store_club_ids,
)
from clubfit.services.catalog_matcher import reconcile_model_names
from clubfit.services.catalog_service import get_all_clubs, get_clubs_by_ids
from clubfit.services.engine import get_recommendations
from clubfit.services.enrichment_service import enrich_missing_models

logger = logging.getLogger(__name__)


async def _candidates_from_model(
    supabase_client: Client,
    user_input: UserInput,
    catalog: List[Club],
) -> List[Club]:
    suggestion = await suggest_club_models(user_input, catalog)
    matched, unmatched = reconcile_model_names(suggestion.model_names, catalog)

    if unmatched and settings.SERPAPI_API_KEY:
        enriched = await enrich_missing_models(supabase_client, unmatched, catalog)
        for club in enriched:
            if all(existing.slug != club.slug for existing in matched):
                matched.append(club)
    elif unmatched:
        logger.info(f"SERPAPI_API_KEY not set, skipping enrichment of {len(unmatched)} names")

    return matched


def _in_catalog_order(candidates: List[Club], catalog: List[Club]) -> List[Club]:
    """
    Put candidates in catalog order so engine ties follow the catalog.

    With the catalog loaded, position in it decides and clubs it does not
    hold (fresh enrichment inserts) go last. Cached candidates are ordered by
    their numeric id, the order get_all_clubs returns.
    """
    if catalog:
        position = {club.slug: index for index, club in enumerate(catalog)}
        return sorted(candidates, key=lambda club: position.get(club.slug, len(catalog)))
    return sorted(
        candidates,
        key=lambda club: int(club.id) if club.id.isdigit() else float("inf"),
    )


async def get_club_recommendations(
    supabase_client: Client,
    user_input: UserInput,
) -> List[RecommendationResult]:
    """
    Produce ranked, explained club recommendations for a player.

    Args:
        supabase_client: Supabase client for the catalog database
        user_input: Normalized player profile

    Returns:
        Up to 6 RecommendationResult, best first; empty if nothing fits
    """
    logger.info(
        f"get_club_recommendations called (handicap={user_input.handicap}, "
        f"goal={user_input.goal}, budget={user_input.budget})"
    )

    use_cache = is_cacheable(user_input)
    key = build_cache_key(user_input)

    candidates: List[Club] = []
    if use_cache:
        cached_ids = await get_cached_club_ids(supabase_client, key)
        if cached_ids:
            candidates = await get_clubs_by_ids(supabase_client, cached_ids)
            if not candidates:
                logger.info("Cached clubs no longer exist, treating as miss")

    catalog: List[Club] = []
    if not candidates:
        catalog = await get_all_clubs(supabase_client)
        candidates = await _candidates_from_model(supabase_client, user_input, catalog)

        if use_cache:
            club_ids = [int(club.id) for club in candidates if club.id.isdigit()]
            await store_club_ids(supabase_client, key, club_ids)

    ranked = get_recommendations(user_input, _in_catalog_order(candidates, catalog))
    if not ranked:
        if not catalog:
            catalog = await get_all_clubs(supabase_client)
        logger.info("No suggested club fits the handicap, ranking the full catalog")
        ranked = get_recommendations(user_input, catalog)

    if not ranked:
        logger.info(f"No club covers handicap={user_input.handicap}")
        return []

    explanations = await asyncio.gather(
        *(explain_recommendation(user_input, result) for result in ranked)
    )
    for result, explanation in zip(ranked, explanations):
        result.explanation = explanation

    logger.info(f"Returning {len(ranked)} recommendations")
    return ranked
