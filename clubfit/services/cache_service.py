"""
Recommendation cache backed by the ``recommendation_cache`` table.

Rules:
- Key is (handicap, goal, budget) after UserInput normalization, so
  "Intermediate" / 15 and "Mid-Range" / "Mid-range" share a row.
- Requests with preferredBrand, age or clubSpeed never read or write the
  cache: the key does not capture those fields.
- Rows older than RECOMMENDATION_CACHE_TTL_HOURS are ignored; the newest
  fresh row wins. Rows are append-only; POST /api/setup clears the table.
- Best effort: lookup/store failures are logged and treated as a miss.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, NamedTuple, Optional, cast

from supabase import Client

from clubfit.config import settings
from clubfit.schemas.recommendations import UserInput
from clubfit.services.catalog_service import CACHE_TABLE

logger = logging.getLogger(__name__)


class CacheKey(NamedTuple):
    handicap: int
    goal: str
    budget: str


def build_cache_key(user_input: UserInput) -> CacheKey:
    return CacheKey(
        handicap=int(user_input.handicap),
        goal=user_input.goal,
        budget=user_input.budget,
    )


def is_cacheable(user_input: UserInput) -> bool:
    """Whether this request may use the cache at all."""
    return settings.RECOMMENDATION_CACHE_ENABLED and not user_input.has_personalization


async def get_cached_club_ids(
    supabase_client: Client,
    key: CacheKey,
    ttl_hours: Optional[int] = None,
) -> Optional[List[int]]:
    """
    Look up the newest fresh cache row for ``key``.

    Returns:
        The cached club ids, or None on miss/expiry/error
    """
    if ttl_hours is None:
        ttl_hours = settings.RECOMMENDATION_CACHE_TTL_HOURS
    cutoff = datetime.now(timezone.utc) - timedelta(hours=ttl_hours)

    try:
        result = (
            supabase_client.table(CACHE_TABLE)
            .select("*")
            .eq("handicap", key.handicap)
            .eq("goal", key.goal)
            .eq("budget", key.budget)
            .gte("created_at", cutoff.isoformat())
            .order("created_at", desc=True)
            .limit(1)
            .execute()
        )
    except Exception as e:
        logger.warning(f"Recommendation cache lookup failed, treating as miss: {e}")
        return None

    rows = cast(List[Dict[str, Any]], result.data or [])
    if not rows:
        logger.info(f"Recommendation cache miss for {tuple(key)}")
        return None

    club_ids = [int(club_id) for club_id in rows[0].get("recommended_ids") or []]
    if not club_ids:
        logger.info(f"Recommendation cache row for {tuple(key)} is empty, treating as miss")
        return None

    logger.info(f"Recommendation cache hit for {tuple(key)}: {len(club_ids)} clubs")
    return club_ids


async def store_club_ids(
    supabase_client: Client,
    key: CacheKey,
    club_ids: List[int],
) -> bool:
    """
    Append a cache row for ``key``.

    Returns:
        True if the row was written, False if the write failed (logged)
    """
    if not club_ids:
        return False

    try:
        supabase_client.table(CACHE_TABLE).insert({
            "handicap": key.handicap,
            "goal": key.goal,
            "budget": key.budget,
            "recommended_ids": club_ids,
        }).execute()
    except Exception as e:
        logger.warning(f"Failed to store recommendation cache row for {tuple(key)}: {e}")
        return False

    logger.info(f"Stored recommendation cache row for {tuple(key)}")
    return True
