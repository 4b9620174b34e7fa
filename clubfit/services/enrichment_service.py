"""
Catalog enrichment for model names the catalog does not know.

For each unmatched name:
1. Image search and attribute extraction run concurrently
2. Attributes that fail validation skip the model (logged)
3. If the extracted brand/model slugs onto an existing club, that club is
   reused instead of inserting a duplicate
4. Otherwise a new ``club`` row is inserted

Names are processed one after another.
"""

import asyncio
import logging
from typing import List, Optional, Sequence

from supabase import Client

from clubfit.agents.club_advisor import extract_club_attributes
from clubfit.schemas.clubs import Club
from clubfit.services.catalog_matcher import make_slug
from clubfit.services.catalog_service import insert_club
from clubfit.services.image_search import search_club_image
from clubfit.utils.constants import PLACEHOLDER_IMAGE_URL

logger = logging.getLogger(__name__)


async def enrich_missing_model(
    supabase_client: Client,
    model_name: str,
    catalog: Sequence[Club],
) -> Optional[Club]:
    """
    Create (or find) a catalog club for ``model_name``.

    Returns:
        The new or existing club, or None if the attributes were unusable
    """
    logger.info(f"Enriching catalog with '{model_name}'")

    search = asyncio.create_task(search_club_image(f"{model_name} golf irons"))
    extract = asyncio.create_task(extract_club_attributes(model_name))
    try:
        image_url, attributes = await asyncio.gather(search, extract)
    except Exception:
        # Cancel whichever side is still running
        for task in (search, extract):
            task.cancel()
        raise

    if attributes is None:
        logger.warning(f"Skipping enrichment for '{model_name}': no usable attributes")
        return None

    slug = make_slug(attributes.brand, attributes.model)
    for club in catalog:
        if club.slug == slug:
            logger.info(f"'{model_name}' resolved to existing club {slug} after enrichment")
            return club

    return await insert_club(
        supabase_client,
        attributes,
        image_url=image_url or PLACEHOLDER_IMAGE_URL,
    )


async def enrich_missing_models(
    supabase_client: Client,
    model_names: Sequence[str],
    catalog: Sequence[Club],
) -> List[Club]:
    """
    Enrich each name in turn.

    Clubs created earlier in the loop are visible to later names, so two
    spellings of the same model produce one row.
    """
    known: List[Club] = list(catalog)
    enriched: List[Club] = []

    for name in model_names:
        club = await enrich_missing_model(supabase_client, name, known)
        if club is None:
            continue
        if all(existing.slug != club.slug for existing in known):
            known.append(club)
        if all(existing.slug != club.slug for existing in enriched):
            enriched.append(club)

    logger.info(f"Enrichment produced {len(enriched)} clubs from {len(model_names)} names")
    return enriched
