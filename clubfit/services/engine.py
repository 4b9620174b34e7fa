"""
Matching engine: filter clubs by handicap range, score them, rank them.

Pure functions over in-memory lists; no I/O. The scoring formula is a fixed
table (see clubfit.utils.constants.SCORE_WEIGHTS):

| Factor             | Weight | Rule                                                      |
|--------------------|--------|-----------------------------------------------------------|
| Goal match         | 40     | goal in strengths; 30 for Accuracy + Workability           |
| Budget match       | 30     | exact tier; 15 if requested tier is one step above club's |
| Handicap centering | 20     | max(0, 20 - 2 * |handicap - midpoint(range)|)            |
| Category bonus     | 10     | >20 + Game Improvement, or <10 + Player's Distance        |
"""

import logging
from typing import List, Optional, Sequence

from clubfit.schemas.clubs import Club
from clubfit.schemas.recommendations import RecommendationResult, UserInput
from clubfit.utils.constants import (
    BADGES,
    HIGH_HANDICAP_THRESHOLD,
    LOW_HANDICAP_THRESHOLD,
    MAX_RECOMMENDATIONS,
    PRICE_TIERS,
    SCORE_WEIGHTS,
)

logger = logging.getLogger(__name__)


def filter_by_handicap(handicap: float, clubs: Sequence[Club]) -> List[Club]:
    """Keep clubs whose inclusive handicap range contains ``handicap``."""
    return [
        club for club in clubs
        if club.handicap_range[0] <= handicap <= club.handicap_range[1]
    ]


def _goal_score(goal: str, club: Club) -> float:
    if goal in club.key_strengths:
        return SCORE_WEIGHTS['GOAL_MATCH']
    if goal == "Accuracy" and "Workability" in club.key_strengths:
        return SCORE_WEIGHTS['GOAL_ACCURACY_WORKABILITY']
    return 0


def _budget_score(budget: str, club: Club) -> float:
    if budget == club.price_point:
        return SCORE_WEIGHTS['BUDGET_MATCH']
    if PRICE_TIERS.index(budget) - PRICE_TIERS.index(club.price_point) == 1:
        return SCORE_WEIGHTS['BUDGET_ONE_STEP_BELOW']
    return 0


def _centering_score(handicap: float, club: Club) -> float:
    low, high = club.handicap_range
    midpoint = (low + high) / 2
    penalty = SCORE_WEIGHTS['HANDICAP_CENTERING_PENALTY_PER_STROKE'] * abs(handicap - midpoint)
    return max(0.0, SCORE_WEIGHTS['HANDICAP_CENTERING'] - penalty)


def _category_score(handicap: float, club: Club) -> float:
    if handicap > HIGH_HANDICAP_THRESHOLD and club.category == "Game Improvement":
        return SCORE_WEIGHTS['CATEGORY_BONUS']
    if handicap < LOW_HANDICAP_THRESHOLD and club.category == "Player's Distance":
        return SCORE_WEIGHTS['CATEGORY_BONUS']
    return 0


def score_club(user_input: UserInput, club: Club) -> float:
    """
    Compute the match score (0-100) of ``club`` for ``user_input``.

    Does not check the handicap range; callers filter first.
    """
    return (
        _goal_score(user_input.goal, club)
        + _budget_score(user_input.budget, club)
        + _centering_score(user_input.handicap, club)
        + _category_score(user_input.handicap, club)
    )


def assign_badge(rank: int, club: Club) -> Optional[str]:
    """Display label derived from rank first, then price tier."""
    if rank == 1:
        return BADGES['RANK_1']
    if rank == 2:
        return BADGES['RANK_2']
    if club.price_point == "Budget":
        return BADGES['BUDGET_TIER']
    if club.price_point == "Premium":
        return BADGES['PREMIUM_TIER']
    return None


def get_recommendations(
    user_input: UserInput,
    clubs: Sequence[Club],
    limit: int = MAX_RECOMMENDATIONS,
) -> List[RecommendationResult]:
    """
    Filter, score and rank clubs for a player.

    Ties keep the input (catalog) order because ``sorted`` is stable.
    Explanations are left empty; the recommendation service fills them in.
    """
    eligible = filter_by_handicap(user_input.handicap, clubs)
    scored = sorted(
        ((score_club(user_input, club), club) for club in eligible),
        key=lambda pair: pair[0],
        reverse=True,
    )

    results: List[RecommendationResult] = []
    for rank, (score, club) in enumerate(scored[:limit], start=1):
        results.append(RecommendationResult(
            **club.model_dump(),
            rank=rank,
            match_score=round(score),
            badge=assign_badge(rank, club),
            explanation="",
        ))

    logger.debug(
        f"Engine ranked {len(results)} of {len(clubs)} clubs "
        f"({len(eligible)} in range) for handicap={user_input.handicap}"
    )
    return results
