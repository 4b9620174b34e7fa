"""
Club Advisor - Gemini calls for the recommendation flow

Three single-shot calls, no tools, no iterative function calling:
- suggest_club_models: candidate model names for a player profile
- explain_recommendation: 2-3 sentence justification for a ranked club
- extract_club_attributes: structured attributes for enrichment

Usage:
    from clubfit.agents.club_advisor import suggest_club_models

    suggestion = await suggest_club_models(user_input, catalog)
"""

from clubfit.agents.club_advisor.agent import (
    explain_recommendation,
    extract_club_attributes,
    parse_json_content,
    suggest_club_models,
)
from clubfit.agents.club_advisor.prompts import CLUB_ADVISOR_SYSTEM_PROMPT

__all__ = [
    "suggest_club_models",
    "explain_recommendation",
    "extract_club_attributes",
    "parse_json_content",
    "CLUB_ADVISOR_SYSTEM_PROMPT",
]
