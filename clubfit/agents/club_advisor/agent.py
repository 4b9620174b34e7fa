"""
Club Advisor Runner

Single-shot Gemini calls used by the recommendation flow. Each function makes
one request through the async client and returns validated data or raises.

Errors:
- ServiceNotConfiguredError when GOOGLE_API_KEY is missing
- LLMResponseError when the model output is empty or not the expected JSON
- Anything the SDK raises propagates to the caller unchanged
"""

import json
import logging
import re
from typing import Any, Dict, Optional, Sequence

from google import genai
from google.genai import types
from pydantic import ValidationError

from clubfit.agents.club_advisor.prompts import (
    CLUB_ADVISOR_SYSTEM_PROMPT,
    build_attributes_prompt,
    build_explanation_prompt,
    build_suggestion_prompt,
)
from clubfit.config import settings
from clubfit.schemas.clubs import Club, ClubAttributes
from clubfit.schemas.recommendations import ClubSuggestion, UserInput
from clubfit.utils.errors import LLMResponseError, ServiceNotConfiguredError

logger = logging.getLogger(__name__)

# Initialize Gemini client (lazy initialization)
_gemini_client = None


def _get_gemini_client():
    """
    Lazy initialization of Gemini client.
    Uses the Google Gen AI SDK.
    """
    global _gemini_client

    if _gemini_client is not None:
        return _gemini_client

    if not settings.GOOGLE_API_KEY:
        logger.error("GOOGLE_API_KEY not configured")
        raise ServiceNotConfiguredError(["GOOGLE_API_KEY"])

    _gemini_client = genai.Client(api_key=settings.GOOGLE_API_KEY)
    logger.info("Gemini client initialized for club advisor")
    return _gemini_client


def parse_json_content(content: Optional[str]) -> Dict[str, Any]:
    """
    Parse a JSON object out of model text.

    Tolerates ```json fences, leading prose and trailing commas, which the
    model produces now and then even when told not to.

    Raises:
        LLMResponseError: If no JSON object can be parsed
    """
    if not content or not content.strip():
        raise LLMResponseError("Empty response from language model")

    json_content = content.strip()

    fence_match = re.search(r'```(?:json)?\s*([\s\S]*?)```', json_content, re.IGNORECASE)
    if fence_match:
        json_content = fence_match.group(1).strip()
    else:
        json_start = json_content.find('{')
        if json_start > 0:
            json_content = json_content[json_start:]

    # Remove trailing commas before } or ] (common LLM mistake)
    json_content = re.sub(r',(\s*[}\]])', r'\1', json_content)

    try:
        data = json.loads(json_content)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse JSON response: {e}")
        logger.error(f"Raw content: {content[:500]}")
        raise LLMResponseError(f"Language model returned invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise LLMResponseError("Language model returned JSON that is not an object")
    return data


async def _generate(prompt: str, *, temperature: float, json_output: bool, max_output_tokens: int) -> str:
    client = _get_gemini_client()

    config = types.GenerateContentConfig(
        system_instruction=CLUB_ADVISOR_SYSTEM_PROMPT,
        temperature=temperature,
        max_output_tokens=max_output_tokens,
        response_mime_type="application/json" if json_output else None,
    )

    response = await client.aio.models.generate_content(
        model=settings.GEMINI_MODEL,
        contents=prompt,
        config=config,
    )
    return (response.text or "").strip()


async def suggest_club_models(user_input: UserInput, catalog: Sequence[Club]) -> ClubSuggestion:
    """
    Ask the model for candidate iron sets for this player.

    Args:
        user_input: Normalized player profile
        catalog: Current catalog, listed in the prompt

    Returns:
        ClubSuggestion with model names (may include names not in the catalog)
    """
    logger.info(
        f"Requesting club suggestions (handicap={user_input.handicap}, "
        f"goal={user_input.goal}, budget={user_input.budget}, catalog={len(catalog)})"
    )

    content = await _generate(
        build_suggestion_prompt(user_input, catalog),
        temperature=0.2,
        json_output=True,
        max_output_tokens=1024,
    )
    data = parse_json_content(content)

    try:
        suggestion = ClubSuggestion.model_validate(data)
    except ValidationError as e:
        raise LLMResponseError(f"Suggestion JSON has the wrong shape: {e}") from e

    logger.info(f"Model suggested {len(suggestion.model_names)} clubs: {suggestion.model_names}")
    return suggestion


async def explain_recommendation(user_input: UserInput, club: Club) -> str:
    """Return a short plain-text justification for recommending ``club``."""
    content = await _generate(
        build_explanation_prompt(user_input, club),
        temperature=0.4,
        json_output=False,
        max_output_tokens=200,
    )
    if not content:
        raise LLMResponseError(f"Empty explanation for {club.slug}")
    return content


async def extract_club_attributes(model_name: str) -> Optional[ClubAttributes]:
    """
    Ask the model for catalog attributes of a model missing from the catalog.

    Returns:
        Validated ClubAttributes, or None if the model's answer fails
        validation (out-of-range handicaps, unknown category...)

    Raises:
        LLMResponseError: If the output is not JSON at all
    """
    content = await _generate(
        build_attributes_prompt(model_name),
        temperature=0.0,
        json_output=True,
        max_output_tokens=512,
    )
    data = parse_json_content(content)

    try:
        return ClubAttributes.model_validate(data)
    except ValidationError as e:
        logger.warning(f"Discarding attributes for '{model_name}': {e.error_count()} validation errors")
        return None
