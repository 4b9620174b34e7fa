"""
Scoring constants for the matching engine and fixed domain vocabularies.

The weights below are a fixed configuration table, not tuned parameters.
A perfect match scores 100.
"""

# Ordered cheapest -> most expensive (order matters for the budget step rule)
PRICE_TIERS = ("Budget", "Mid-range", "Premium")

GOALS = ("Distance", "Accuracy", "Forgiveness", "Feel")

CLUB_CATEGORIES = ("Game Improvement", "Player's Distance", "Player's Iron", "Blade")

KEY_STRENGTHS = ("Forgiveness", "Distance", "Feel", "Workability")

SCORE_WEIGHTS = {
    'GOAL_MATCH': 40,
    # Accuracy is not a strength tag; Workability is the closest proxy
    'GOAL_ACCURACY_WORKABILITY': 30,
    'BUDGET_MATCH': 30,
    # Requested tier is exactly one step above the club's tier
    'BUDGET_ONE_STEP_BELOW': 15,
    'HANDICAP_CENTERING': 20,
    'HANDICAP_CENTERING_PENALTY_PER_STROKE': 2,
    'CATEGORY_BONUS': 10,
}

# Category bonus thresholds
HIGH_HANDICAP_THRESHOLD = 20   # handicap > 20 favours Game Improvement
LOW_HANDICAP_THRESHOLD = 10    # handicap < 10 favours Player's Distance

MAX_RECOMMENDATIONS = 6

# Form categories sent by the calculator UI instead of a number
HANDICAP_CATEGORIES = {
    'beginner': 25,
    'intermediate': 15,
    'advanced': 5,
}

BADGES = {
    'RANK_1': 'Best Match',
    'RANK_2': 'Top Pick',
    'BUDGET_TIER': 'Great Value',
    'PREMIUM_TIER': 'Premium Choice',
}

# Used when enrichment cannot find an image for a new club
PLACEHOLDER_IMAGE_URL = (
    "https://images.unsplash.com/photo-1593113598332-cd288d649433"
    "?w=400&h=300&fit=crop&crop=center"
)
