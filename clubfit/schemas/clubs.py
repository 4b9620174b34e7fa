"""
Pydantic schemas for golf clubs in the catalog.

JSON field names are camelCase (``handicapRange``, ``keyStrengths``...) because
the browser UI consumes these models directly. Python code uses snake_case.
"""

import re
from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from clubfit.utils.constants import KEY_STRENGTHS, PRICE_TIERS

# Type aliases matching DB enums
ClubCategory = Literal["Game Improvement", "Player's Distance", "Player's Iron", "Blade"]
KeyStrength = Literal["Forgiveness", "Distance", "Feel", "Workability"]
PriceTier = Literal["Budget", "Mid-range", "Premium"]


def canonical_price_tier(value: object) -> object:
    """
    Map loose price-tier spellings ("Mid-Range", "mid range", "PREMIUM")
    onto the canonical tier names. Unknown values pass through so pydantic
    reports them.
    """
    if not isinstance(value, str):
        return value
    squashed = re.sub(r"[^a-z]", "", value.lower())
    for tier in PRICE_TIERS:
        if re.sub(r"[^a-z]", "", tier.lower()) == squashed:
            return tier
    return value


class Club(BaseModel):
    """
    A single iron-set model in the catalog.

    ``slug`` is the stable identifier assigned at ingestion time
    (see ``clubfit.services.catalog_matcher.make_slug``); ``id`` is the
    database primary key as a string.
    """
    id: str = Field(..., description="Catalog identifier", examples=["12", "ping_g430"])
    slug: str = Field(..., description="Stable name key", examples=["ping_g430"])
    brand: str = Field(..., examples=["Ping"])
    model: str = Field(..., examples=["G430"])
    category: ClubCategory
    handicap_range: Tuple[int, int] = Field(
        ...,
        description="Inclusive [min, max] handicap the club is designed for",
        examples=[[12, 30]]
    )
    key_strengths: List[KeyStrength] = Field(default_factory=list)
    price_point: PriceTier
    approximate_price: Optional[float] = Field(
        None,
        description="Approximate retail price in USD",
        gt=0
    )
    image_url: str

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
    }

    @property
    def display_name(self) -> str:
        return f"{self.brand} {self.model}"


class ClubAttributes(BaseModel):
    """
    Structured attributes the language model returns for a club model that is
    missing from the catalog. Validated before anything is inserted.
    """
    brand: str = Field(..., min_length=1, max_length=100)
    model: str = Field(..., min_length=1, max_length=200)
    category: ClubCategory
    handicap_range_min: int = Field(..., ge=0, le=54)
    handicap_range_max: int = Field(..., ge=0, le=54)
    key_strengths: List[KeyStrength] = Field(..., min_length=1)
    price_point: PriceTier
    approximate_price: Optional[float] = Field(None, gt=0)

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
    }

    @field_validator("key_strengths", mode="before")
    @classmethod
    def drop_unknown_strengths(cls, v):
        """Keep only recognised strength tags (case-insensitive), in order, once."""
        if not isinstance(v, list):
            return v
        lookup = {s.lower(): s for s in KEY_STRENGTHS}
        kept: List[str] = []
        for item in v:
            tag = lookup.get(str(item).strip().lower())
            if tag and tag not in kept:
                kept.append(tag)
        return kept

    @field_validator("price_point", mode="before")
    @classmethod
    def normalize_price_point(cls, v):
        return canonical_price_tier(v)

    @model_validator(mode="after")
    def check_range_order(self):
        if self.handicap_range_min > self.handicap_range_max:
            raise ValueError("handicap_range_min must not exceed handicap_range_max")
        return self
