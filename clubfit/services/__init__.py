"""
Service layer for the ClubFit backend.

Services sit between routes (HTTP layer) and the agents/database:
- engine: deterministic filtering, scoring and badges
- catalog_service / cache_service: Supabase persistence
- catalog_matcher: model-name reconciliation
- image_search / enrichment_service: adding unknown models to the catalog
- recommendation_service: the end-to-end pipeline
- image_proxy: third-party image fetching
"""

from .engine import get_recommendations
from .recommendation_service import get_club_recommendations

__all__ = [
    "get_recommendations",
    "get_club_recommendations",
]
