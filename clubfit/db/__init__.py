"""
Database access layer for the ClubFit backend.

Tables (owned outside this repo, never created here):
- club: the catalog of iron-set models available for recommendation
- recommendation_cache: (handicap, goal, budget) -> recommended club ids

Includes:
- Supabase client initialization
"""

from .client import get_supabase_client

__all__ = ["get_supabase_client"]
