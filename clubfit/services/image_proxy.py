"""
Image proxy - fetch third-party club images on behalf of the browser

Retailer CDNs often block hotlinking, so each URL is tried with three header
sets (decreasing timeouts). When all of them fail and SERPAPI_API_KEY is set,
a replacement image is searched by the product name in the URL filename.
URLs that still fail are remembered in a process-local FailedUrlCache so
repeated page loads do not hammer dead links.
"""

from __future__ import annotations

import logging
import re
import time
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple
from urllib.parse import urlparse

import httpx

from clubfit.config import settings
from clubfit.services.image_search import search_club_image
from clubfit.utils.errors import ImageSearchError

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "image/jpeg"
FAILED_URL_CACHE_MAX_ENTRIES = 1000
FAILED_URL_CACHE_TTL_SECONDS = 3600.0

_IMAGE_EXTENSION_RE = re.compile(r"\.(jpg|jpeg|png|webp)$", re.IGNORECASE)

BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "image/webp,image/apng,image/*,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}


@dataclass(frozen=True)
class FetchStrategy:
    name: str
    headers: Dict[str, str]
    timeout: float


FETCH_STRATEGIES: Tuple[FetchStrategy, ...] = (
    FetchStrategy(
        name="browser",
        headers={
            **BROWSER_HEADERS,
            "DNT": "1",
            "Upgrade-Insecure-Requests": "1",
            "Sec-Fetch-Dest": "image",
            "Sec-Fetch-Mode": "no-cors",
            "Sec-Fetch-Site": "cross-site",
        },
        timeout=10.0,
    ),
    FetchStrategy(
        name="referer",
        headers={
            "User-Agent": (
                "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
                "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
            ),
            "Accept": "image/webp,image/apng,image/*,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.9",
            "Referer": "https://www.google.com/",
        },
        timeout=8.0,
    ),
    FetchStrategy(
        name="minimal",
        headers={"User-Agent": "Mozilla/5.0 (compatible; GolfClubBot/1.0)"},
        timeout=5.0,
    ),
)


@dataclass
class ProxiedImage:
    content: bytes
    content_type: str = DEFAULT_CONTENT_TYPE


@dataclass
class FailedUrlCache:
    """
    Bounded, expiring set of URLs that could not be fetched.

    Best-effort and per-process: a restart forgets everything.
    """

    max_entries: int = FAILED_URL_CACHE_MAX_ENTRIES
    ttl_seconds: float = FAILED_URL_CACHE_TTL_SECONDS
    clock: Callable[[], float] = time.monotonic
    _entries: "OrderedDict[str, float]" = field(default_factory=OrderedDict, repr=False)

    def __contains__(self, url: str) -> bool:
        failed_at = self._entries.get(url)
        if failed_at is None:
            return False
        if self.clock() - failed_at >= self.ttl_seconds:
            del self._entries[url]
            return False
        return True

    def __len__(self) -> int:
        return len(self._entries)

    def add(self, url: str) -> None:
        self._entries.pop(url, None)
        self._entries[url] = self.clock()
        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)

    def clear(self) -> None:
        self._entries.clear()


failed_url_cache = FailedUrlCache()


def _http_client_factory(**kwargs: Any) -> httpx.AsyncClient:
    return httpx.AsyncClient(follow_redirects=True, **kwargs)


def is_proxyable_url(url: str) -> bool:
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def product_name_from_url(url: str) -> str:
    """'https://x/img/Titleist_T200-irons.jpg' -> 'Titleist T200 irons'"""
    file_name = urlparse(url).path.rstrip("/").split("/")[-1]
    file_name = _IMAGE_EXTENSION_RE.sub("", file_name)
    return re.sub(r"[_-]", " ", file_name).strip()


async def _fetch(url: str, headers: Dict[str, str], timeout: float) -> ProxiedImage:
    async with _http_client_factory(timeout=timeout) as client:
        response = await client.get(url, headers=headers)
    if not response.is_success:
        raise httpx.HTTPStatusError(
            f"Failed to fetch image: {response.status_code}",
            request=response.request,
            response=response,
        )
    content_type = response.headers.get("content-type") or DEFAULT_CONTENT_TYPE
    return ProxiedImage(content=response.content, content_type=content_type)


async def _search_fallback(url: str) -> Optional[ProxiedImage]:
    product_name = product_name_from_url(url)
    if not product_name:
        return None

    logger.info(f"Searching replacement image for '{product_name}'")
    try:
        replacement = await search_club_image(f"{product_name} golf club image")
        if not replacement:
            return None
        return await _fetch(replacement, BROWSER_HEADERS, FETCH_STRATEGIES[0].timeout)
    except (ImageSearchError, httpx.HTTPError) as e:
        logger.info(f"Image search fallback failed for {url}: {e}")
        return None


async def proxy_image(url: str, cache: Optional[FailedUrlCache] = None) -> Optional[ProxiedImage]:
    """
    Fetch an image, trying each strategy in turn.

    Args:
        url: Absolute http(s) image URL
        cache: Failed-URL cache (defaults to the module-level one)

    Returns:
        ProxiedImage, or None when the URL is known-failed or unfetchable
    """
    cache = failed_url_cache if cache is None else cache

    if url in cache:
        logger.info(f"Skipping known failed URL: {url}")
        return None

    for index, strategy in enumerate(FETCH_STRATEGIES, start=1):
        try:
            image = await _fetch(url, strategy.headers, strategy.timeout)
            logger.debug(f"Fetched {url} with strategy {index} ({strategy.name})")
            return image
        except httpx.HTTPError as e:
            logger.info(f"Strategy {index} ({strategy.name}) failed for {url}: {e}")

    if settings.SERPAPI_API_KEY:
        image = await _search_fallback(url)
        if image is not None:
            return image

    logger.warning(f"All image fetch strategies failed for: {url}")
    cache.add(url)
    return None
