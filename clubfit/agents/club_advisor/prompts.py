"""
Club Advisor Prompt Templates

Contains the system prompt and the user prompt builders for the three
language-model calls in the recommendation flow:

1. Suggestion: pick candidate iron models for a player profile
2. Explanation: justify one ranked club in 2-3 sentences
3. Attributes: describe a model that is missing from the catalog

Prompt Engineering Pattern:
- Uses XML tags for structured content
- System prompt defines role only
- User prompts carry task instructions, context and the JSON contract
"""

from typing import Sequence

from clubfit.schemas.clubs import Club
from clubfit.schemas.recommendations import UserInput
from clubfit.utils.constants import CLUB_CATEGORIES, KEY_STRENGTHS, PRICE_TIERS

# =============================================================================
# SYSTEM PROMPT
# =============================================================================

CLUB_ADVISOR_SYSTEM_PROMPT = """You are a world-class golf club fitting expert working for an online iron-set recommendation tool.

<role>
You match golfers with iron sets based on handicap, goals, budget and swing characteristics.
You know current and recent iron models from the major manufacturers (Titleist, Callaway,
TaylorMade, Ping, Mizuno, Srixon, Cobra, Wilson Staff and others).
</role>

<limitations>
- Only talk about golf equipment
- Never invent model names; use the exact commercial name of a real iron set
- Keep explanations factual and concise, no hype, no emojis
</limitations>

<output_format>
When asked for JSON, return only the JSON object. No markdown code blocks, no explanatory text.
</output_format>
"""


def _player_profile(user_input: UserInput) -> str:
    lines = [
        f"- Handicap: {user_input.handicap}",
        f"- Primary goal: {user_input.goal}",
        f"- Budget: {user_input.budget}",
    ]
    if user_input.preferred_brand:
        lines.append(f"- Preferred brand: {user_input.preferred_brand}")
    if user_input.age is not None:
        lines.append(f"- Age: {user_input.age}")
    if user_input.club_speed is not None:
        lines.append(f"- 7-iron swing speed: {user_input.club_speed:g} mph")
    return "\n".join(lines)


def build_suggestion_prompt(user_input: UserInput, catalog: Sequence[Club]) -> str:
    """
    Build the prompt asking for candidate iron models.

    The catalog is listed as "Brand Model" lines so the model can echo exact
    names back; names outside the list are allowed and trigger enrichment.
    """
    if catalog:
        available = "\n".join(f"- {club.display_name}" for club in catalog)
    else:
        available = "- (catalog is empty)"

    return f"""<task>
Recommend 3-6 iron sets for this player.
Prefer models from AVAILABLE CLUBS and copy their names exactly as listed.
You may add current models that are not listed if they clearly fit the player better.
</task>

<available_clubs>
{available}
</available_clubs>

<player_profile>
{_player_profile(user_input)}
</player_profile>

<output_schema>
{{
  "modelNames": ["Brand Model", "Brand Model", "Brand Model"],
  "reasoning": "One or two sentences on why these models fit"
}}
</output_schema>
"""


def build_explanation_prompt(user_input: UserInput, club: Club) -> str:
    """Build the prompt for a 2-3 sentence justification of one club."""
    return (
        f"A golfer with a handicap of {user_input.handicap} whose main goal is "
        f"{user_input.goal} and whose budget is {user_input.budget} has been recommended "
        f"the {club.display_name} ({club.category}, strengths: "
        f"{', '.join(club.key_strengths) or 'n/a'}). "
        "Explain in 2-3 concise sentences why this specific club is an excellent choice "
        "for this user, referencing their goal and handicap. Plain text only."
    )


def build_attributes_prompt(model_name: str) -> str:
    """Build the prompt asking for structured attributes of an unknown model."""
    return f"""<task>
Describe the iron set "{model_name}" for a club catalog.
Use the manufacturer's name as brand and the commercial model name as model (without the brand).
</task>

<allowed_values>
category: one of {list(CLUB_CATEGORIES)}
keyStrengths: 1-3 of {list(KEY_STRENGTHS)}
pricePoint: one of {list(PRICE_TIERS)}
handicapRangeMin / handicapRangeMax: integers between 0 and 54, min <= max
approximatePrice: approximate retail price of a 7-piece set in USD, or null
</allowed_values>

<output_schema>
{{
  "brand": "Brand",
  "model": "Model",
  "category": "Game Improvement",
  "handicapRangeMin": 10,
  "handicapRangeMax": 25,
  "keyStrengths": ["Forgiveness", "Distance"],
  "pricePoint": "Mid-range",
  "approximatePrice": 999
}}
</output_schema>
"""
