#!/usr/bin/env python3
"""
Catalog Seed Script

Replaces the Supabase club catalog with the built-in seed list (the same
operation as POST /api/setup) without starting the API server. Cached
recommendations are cleared as well because club ids change.

Usage:
    python scripts/seed_catalog.py
    python scripts/seed_catalog.py --dry-run
"""

import argparse
import asyncio
import logging
import os
import sys

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from clubfit.config import settings
from clubfit.data import SEED_CLUBS
from clubfit.db.client import get_supabase_client
from clubfit.services.catalog_service import reseed_catalog


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def print_seed() -> None:
    print("\n" + "=" * 60)
    print(f"SEED CATALOG ({len(SEED_CLUBS)} clubs)")
    print("=" * 60)
    for club in SEED_CLUBS:
        low, high = club.handicap_range
        print(f"  {club.slug:<30} {club.category:<18} hcp {low:>2}-{high:<2}  {club.price_point}")
    print()


async def run_seed() -> int:
    missing = settings.missing_for("SUPABASE_URL", "SUPABASE_KEY")
    if missing:
        print(f"\n⚠️  ERROR: {', '.join(missing)} not set!")
        print("   Please set them in your .env file.")
        return 1

    supabase_client = get_supabase_client()
    inserted = await reseed_catalog(supabase_client, SEED_CLUBS)
    print(f"✓ Inserted {inserted} clubs")
    return 0


def main():
    parser = argparse.ArgumentParser(
        description="Reseed the ClubFit club catalog"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the seed catalog without touching the database"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    args = parser.parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    print_seed()
    if args.dry_run:
        return

    sys.exit(asyncio.run(run_seed()))


if __name__ == "__main__":
    main()
