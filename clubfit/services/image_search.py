"""
Image search through SerpAPI's Google Images engine.

Used by enrichment (find a picture for a new catalog club) and by the image
proxy fallback (find a replacement when a stored image URL stops working).
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from clubfit.config import settings
from clubfit.utils.errors import ImageSearchError, ServiceNotConfiguredError

logger = logging.getLogger(__name__)

SERPAPI_SEARCH_URL = "https://serpapi.com/search.json"
SEARCH_TIMEOUT_SECONDS = 15.0


def _http_client_factory(**kwargs: Any) -> httpx.AsyncClient:
    timeout = kwargs.pop("timeout", SEARCH_TIMEOUT_SECONDS)
    return httpx.AsyncClient(timeout=timeout, **kwargs)


async def search_club_image(query: str, num_results: int = 5) -> Optional[str]:
    """
    Return the URL of the first Google Images hit for ``query``.

    Returns:
        The full-size image URL (thumbnail if no original), or None when the
        search has no image results

    Raises:
        ServiceNotConfiguredError: If SERPAPI_API_KEY is missing
        ImageSearchError: On transport errors, non-200 responses or API errors
    """
    if not settings.SERPAPI_API_KEY:
        raise ServiceNotConfiguredError(["SERPAPI_API_KEY"])

    params = {
        "engine": "google_images",
        "q": query,
        "num": num_results,
        "api_key": settings.SERPAPI_API_KEY,
    }

    logger.info(f"Searching images for '{query}'")
    try:
        async with _http_client_factory(timeout=SEARCH_TIMEOUT_SECONDS) as client:
            response = await client.get(SERPAPI_SEARCH_URL, params=params)
    except httpx.RequestError as exc:
        raise ImageSearchError(f"image search request failed: {exc}") from exc

    if response.status_code != 200:
        raise ImageSearchError(f"image search failed: {response.status_code}")

    try:
        payload = response.json()
    except ValueError as exc:
        raise ImageSearchError("image search returned a non-JSON response") from exc

    if payload.get("error"):
        # SerpAPI reports "no results" as an error string as well
        if "hasn't returned any results" in str(payload["error"]):
            logger.info(f"No image results for '{query}'")
            return None
        raise ImageSearchError(f"image search error: {payload['error']}")

    for item in payload.get("images_results") or []:
        url = item.get("original") or item.get("thumbnail")
        if url:
            return url

    logger.info(f"No image results for '{query}'")
    return None
