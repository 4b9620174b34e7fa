"""
Club catalog persistence service.

RULES:
1. Rows are created by the seed operation or by enrichment; the recommendation
   flow never updates or deletes catalog rows
2. Reseeding clears recommendation_cache too (cached ids point at old rows)
3. The slug column is the identity used for reconciliation; it is computed
   here at insert time, never taken from the language model
"""

import logging
from typing import Any, Dict, List, Sequence, cast

from supabase import Client

from clubfit.schemas.clubs import Club, ClubAttributes
from clubfit.services.catalog_matcher import make_slug

logger = logging.getLogger(__name__)

CLUB_TABLE = "club"
CACHE_TABLE = "recommendation_cache"


def club_from_row(row: Dict[str, Any]) -> Club:
    """Convert a ``club`` table row to the API model."""
    return Club(
        id=str(row["id"]),
        slug=row.get("slug") or make_slug(row["brand"], row["model"]),
        brand=row["brand"],
        model=row["model"],
        category=row["category"],
        handicap_range=(row["handicap_range_min"], row["handicap_range_max"]),
        key_strengths=row.get("key_strengths") or [],
        price_point=row["price_point"],
        approximate_price=row.get("approximate_price"),
        image_url=row["image_url"],
    )


def club_to_row(club: Club) -> Dict[str, Any]:
    """Convert an API model to a ``club`` insert payload (no id/timestamps)."""
    return {
        "slug": make_slug(club.brand, club.model),
        "brand": club.brand,
        "model": club.model,
        "category": club.category,
        "handicap_range_min": club.handicap_range[0],
        "handicap_range_max": club.handicap_range[1],
        "key_strengths": list(club.key_strengths),
        "price_point": club.price_point,
        "approximate_price": club.approximate_price,
        "image_url": club.image_url,
    }


async def get_all_clubs(supabase_client: Client) -> List[Club]:
    """
    Fetch the whole catalog in insertion order.

    Insertion order is the tie-break order used by the engine.
    """
    result = (
        supabase_client.table(CLUB_TABLE)
        .select("*")
        .order("id")
        .execute()
    )
    rows = cast(List[Dict[str, Any]], result.data or [])
    logger.info(f"Fetched {len(rows)} clubs from catalog")
    return [club_from_row(row) for row in rows]


async def get_clubs_by_ids(supabase_client: Client, club_ids: Sequence[int]) -> List[Club]:
    """
    Fetch specific clubs, returned in the order of ``club_ids``.

    Ids that no longer exist are silently absent from the result.
    """
    if not club_ids:
        return []

    result = (
        supabase_client.table(CLUB_TABLE)
        .select("*")
        .in_("id", list(club_ids))
        .execute()
    )
    rows = cast(List[Dict[str, Any]], result.data or [])
    by_id = {str(row["id"]): club_from_row(row) for row in rows}

    clubs = [by_id[str(club_id)] for club_id in club_ids if str(club_id) in by_id]
    if len(clubs) < len(club_ids):
        logger.warning(
            f"{len(club_ids) - len(clubs)} of {len(club_ids)} requested clubs are missing from catalog"
        )
    return clubs


async def insert_club(
    supabase_client: Client,
    attributes: ClubAttributes,
    image_url: str,
) -> Club:
    """
    Insert a club produced by enrichment.

    Returns:
        The stored club (with its database id)

    Raises:
        RuntimeError: If Supabase returns no row
    """
    payload = {
        "slug": make_slug(attributes.brand, attributes.model),
        "brand": attributes.brand,
        "model": attributes.model,
        "category": attributes.category,
        "handicap_range_min": attributes.handicap_range_min,
        "handicap_range_max": attributes.handicap_range_max,
        "key_strengths": list(attributes.key_strengths),
        "price_point": attributes.price_point,
        "approximate_price": attributes.approximate_price,
        "image_url": image_url,
    }

    logger.info(f"Inserting enriched club slug={payload['slug']}")

    result = supabase_client.table(CLUB_TABLE).insert(payload).execute()

    if not result.data:
        raise RuntimeError(f"Failed to insert club {payload['slug']}: no data returned")

    return club_from_row(cast(Dict[str, Any], result.data[0]))


async def reseed_catalog(supabase_client: Client, seed: Sequence[Club]) -> int:
    """
    Clear the catalog and the recommendation cache, then insert ``seed``.

    Returns:
        Number of clubs inserted
    """
    logger.info("Clearing recommendation cache and club catalog")

    # PostgREST refuses unfiltered deletes; id >= 0 matches every row
    supabase_client.table(CACHE_TABLE).delete().gte("id", 0).execute()
    supabase_client.table(CLUB_TABLE).delete().gte("id", 0).execute()

    rows = [club_to_row(club) for club in seed]
    result = supabase_client.table(CLUB_TABLE).insert(rows).execute()

    inserted = len(result.data or [])
    logger.info(f"Inserted {inserted} seed clubs")
    return inserted
