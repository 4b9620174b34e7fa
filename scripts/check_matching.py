#!/usr/bin/env python3
"""
Model Name Matching Check

Shows how model names (as a language model might write them) reconcile
against the seed catalog. Runs offline: no database, no API keys.

Usage:
    python scripts/check_matching.py
    python scripts/check_matching.py "Titleist T200" "Ping G-430 irons"
    python scripts/check_matching.py --threshold 0.8 "Mizuno JPX923"
"""

import argparse
import logging
import os
import sys

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from clubfit.data import SEED_CLUBS
from clubfit.services.catalog_matcher import make_slug, match_model_name


logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

SAMPLE_NAMES = [
    "Titleist T200 2023",
    "Titleist T200",
    "Callaway Rogue ST Max",
    "Rogue ST MAX",
    "Mizuno JPX 923 Forged",
    "TaylorMade P790",
    "PING G430",
    "Wilson Staff Model Blade",
    "Wilson Staff Model CB",
    "Cobra King Tec",
]


def check(names, threshold=None) -> int:
    print("\n" + "=" * 72)
    print(f"{'NAME':<30} {'RESULT':<10} {'CLUB':<26} SCORE")
    print("=" * 72)

    unmatched = 0
    for name in names:
        result = match_model_name(name, SEED_CLUBS, threshold=threshold)
        if result is None:
            unmatched += 1
            print(f"{name:<30} {'none':<10} {'(would enrich as ' + make_slug(name) + ')':<26}")
            continue
        print(f"{name:<30} {result.method:<10} {result.club.slug:<26} {result.score:.2f}")

    print()
    print(f"{len(names) - unmatched}/{len(names)} matched")
    return unmatched


def main():
    parser = argparse.ArgumentParser(
        description="Check model-name reconciliation against the seed catalog"
    )
    parser.add_argument(
        "names",
        nargs="*",
        help="Model names to check (default: built-in samples)"
    )
    parser.add_argument(
        "--threshold", "-t",
        type=float,
        default=None,
        help="Similarity threshold for the fuzzy fallback (default: MATCH_SIMILARITY_THRESHOLD)"
    )

    args = parser.parse_args()
    check(args.names or SAMPLE_NAMES, threshold=args.threshold)


if __name__ == "__main__":
    main()
