"""
Fixed seed catalog.

POST /api/setup and scripts/seed_catalog.py clear the ``club`` table and
insert exactly these rows. The engine tests also run against this list.
"""

from typing import List

from clubfit.schemas.clubs import Club
from clubfit.utils.constants import PLACEHOLDER_IMAGE_URL

SEED_CLUBS: List[Club] = [
    Club(
        id="titleist_t200_2023",
        slug="titleist_t200_2023",
        brand="Titleist",
        model="T200 (2023)",
        category="Player's Distance",
        handicap_range=(5, 15),
        key_strengths=["Distance", "Feel"],
        price_point="Premium",
        image_url=PLACEHOLDER_IMAGE_URL,
    ),
    Club(
        id="callaway_rogue_st_max",
        slug="callaway_rogue_st_max",
        brand="Callaway",
        model="Rogue ST Max",
        category="Game Improvement",
        handicap_range=(15, 30),
        key_strengths=["Forgiveness", "Distance"],
        price_point="Mid-range",
        image_url=PLACEHOLDER_IMAGE_URL,
    ),
    Club(
        id="mizuno_jpx_923_forged",
        slug="mizuno_jpx_923_forged",
        brand="Mizuno",
        model="JPX 923 Forged",
        category="Player's Iron",
        handicap_range=(8, 18),
        key_strengths=["Feel", "Workability"],
        price_point="Premium",
        image_url=PLACEHOLDER_IMAGE_URL,
    ),
    Club(
        id="taylormade_p790_2023",
        slug="taylormade_p790_2023",
        brand="TaylorMade",
        model="P790 (2023)",
        category="Player's Distance",
        handicap_range=(5, 15),
        key_strengths=["Distance", "Forgiveness"],
        price_point="Premium",
        image_url=PLACEHOLDER_IMAGE_URL,
    ),
    Club(
        id="ping_g430",
        slug="ping_g430",
        brand="Ping",
        model="G430",
        category="Game Improvement",
        handicap_range=(12, 30),
        key_strengths=["Forgiveness", "Distance"],
        price_point="Mid-range",
        image_url=PLACEHOLDER_IMAGE_URL,
    ),
    Club(
        id="wilson_staff_model_blade",
        slug="wilson_staff_model_blade",
        brand="Wilson Staff",
        model="Model Blade",
        category="Blade",
        handicap_range=(0, 8),
        key_strengths=["Feel", "Workability"],
        price_point="Premium",
        image_url=PLACEHOLDER_IMAGE_URL,
    ),
]
