"""
Pydantic schemas for the recommendation endpoint.

These models define the request/response contracts between the calculator
form and POST /api/recommend, plus the structured output expected from the
language model.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from clubfit.schemas.clubs import Club, PriceTier, canonical_price_tier
from clubfit.utils.constants import GOALS, HANDICAP_CATEGORIES

Goal = Literal["Distance", "Accuracy", "Forgiveness", "Feel"]
BadgeLabel = Literal["Best Match", "Top Pick", "Great Value", "Premium Choice"]


# ============================================================================
# REQUEST MODELS
# ============================================================================

class UserInput(BaseModel):
    """
    Player profile submitted by the calculator form.

    The form sends loose values ("Beginner", "Improve Forgiveness",
    "Mid-Range"); validators fold them onto the canonical vocabulary so
    every downstream component (engine, cache key, prompts) sees one spelling.
    """
    handicap: int = Field(
        ...,
        description=(
            "Golf handicap. Accepts a number or one of the form categories "
            "Beginner (25), Intermediate (15), Advanced (5)."
        ),
        ge=-10,
        le=54,
        examples=[15, "Intermediate"]
    )
    goal: Goal = Field(
        ...,
        description="Primary goal for the new irons",
        examples=["Forgiveness", "Improve Distance"]
    )
    budget: PriceTier = Field(
        ...,
        description="Price tier the player is willing to pay",
        examples=["Mid-range"]
    )
    preferred_brand: Optional[str] = Field(
        None,
        description="Brand the player would like to see first",
        max_length=100,
        examples=["Mizuno"]
    )
    age: Optional[int] = Field(None, ge=5, le=110)
    club_speed: Optional[float] = Field(
        None,
        description="7-iron swing speed in mph",
        gt=0,
        le=200
    )

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
    }

    @field_validator("handicap", mode="before")
    @classmethod
    def parse_handicap(cls, v):
        if isinstance(v, bool):
            raise ValueError("handicap must be a number or a skill category")
        if isinstance(v, float):
            return round(v)
        if isinstance(v, str):
            text = v.strip()
            category = HANDICAP_CATEGORIES.get(text.lower())
            if category is not None:
                return category
            try:
                return round(float(text))
            except ValueError:
                raise ValueError(
                    "handicap must be a number or one of: "
                    + ", ".join(name.title() for name in HANDICAP_CATEGORIES)
                )
        return v

    @field_validator("goal", mode="before")
    @classmethod
    def parse_goal(cls, v):
        if not isinstance(v, str):
            return v
        text = v.strip()
        if text.lower().startswith("improve "):
            text = text[len("improve "):].strip()
        for goal in GOALS:
            if goal.lower() == text.lower():
                return goal
        return text

    @field_validator("budget", mode="before")
    @classmethod
    def parse_budget(cls, v):
        return canonical_price_tier(v)

    @property
    def has_personalization(self) -> bool:
        """True when optional fields beyond (handicap, goal, budget) are set."""
        return any(
            value is not None
            for value in (self.preferred_brand, self.age, self.club_speed)
        )


# ============================================================================
# RESPONSE MODELS
# ============================================================================

class RecommendationResult(Club):
    """
    A catalog club decorated for display: rank, computed match score,
    badge and a short natural-language explanation.
    """
    rank: int = Field(..., ge=1, examples=[1])
    match_score: int = Field(
        ...,
        description="Fixed-formula score out of 100 (see services.engine)",
        ge=0,
        le=100,
        examples=[87]
    )
    badge: Optional[BadgeLabel] = None
    explanation: str = Field(
        default="",
        description="2-3 sentence justification written by the language model"
    )


class ErrorResponse(BaseModel):
    """Error body returned with HTTP 500."""
    message: str = Field(..., examples=["Error processing your request."])


# ============================================================================
# LANGUAGE MODEL OUTPUT
# ============================================================================

class ClubSuggestion(BaseModel):
    """JSON object the language model returns when asked for candidate models."""
    model_names: List[str] = Field(default_factory=list)
    reasoning: str = ""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "protected_namespaces": (),
    }

    @field_validator("model_names", mode="before")
    @classmethod
    def strip_blank_names(cls, v):
        if not isinstance(v, list):
            return v
        return [str(name).strip() for name in v if str(name).strip()]
