"""
Tests for the SerpAPI image search client (httpx MockTransport, no network).
"""

from unittest.mock import patch

import httpx
import pytest

from clubfit.config import settings
from clubfit.services import image_search
from clubfit.services.image_search import search_club_image
from clubfit.utils.errors import ImageSearchError, ServiceNotConfiguredError


@pytest.mark.asyncio
async def test_returns_first_original_url(monkeypatch, async_client_factory):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = request.url
        return httpx.Response(200, json={"images_results": [
            {"original": "https://img.example.com/g430.jpg", "thumbnail": "https://t/1.jpg"},
            {"original": "https://img.example.com/other.jpg"},
        ]})

    factory = async_client_factory([handler])
    monkeypatch.setattr(image_search, "_http_client_factory", factory)

    url = await search_club_image("Ping G430 golf irons")

    assert url == "https://img.example.com/g430.jpg"
    assert seen["url"].host == "serpapi.com"
    assert seen["url"].params["engine"] == "google_images"
    assert seen["url"].params["q"] == "Ping G430 golf irons"
    assert seen["url"].params["num"] == "5"
    assert factory.calls[0]["timeout"] == image_search.SEARCH_TIMEOUT_SECONDS


@pytest.mark.asyncio
async def test_falls_back_to_thumbnail(monkeypatch, async_client_factory):
    handler = lambda request: httpx.Response(200, json={"images_results": [
        {"title": "no urls"},
        {"thumbnail": "https://t/2.jpg"},
    ]})
    monkeypatch.setattr(image_search, "_http_client_factory", async_client_factory([handler]))

    assert await search_club_image("anything") == "https://t/2.jpg"


@pytest.mark.asyncio
async def test_no_results_returns_none(monkeypatch, async_client_factory):
    handler = lambda request: httpx.Response(200, json={"images_results": []})
    monkeypatch.setattr(image_search, "_http_client_factory", async_client_factory([handler]))

    assert await search_club_image("nothing") is None


@pytest.mark.asyncio
async def test_no_results_error_string_returns_none(monkeypatch, async_client_factory):
    handler = lambda request: httpx.Response(200, json={
        "error": "Google hasn't returned any results for this query."
    })
    monkeypatch.setattr(image_search, "_http_client_factory", async_client_factory([handler]))

    assert await search_club_image("nothing") is None


@pytest.mark.asyncio
async def test_api_error_raises(monkeypatch, async_client_factory):
    handler = lambda request: httpx.Response(200, json={"error": "Invalid API key."})
    monkeypatch.setattr(image_search, "_http_client_factory", async_client_factory([handler]))

    with pytest.raises(ImageSearchError, match="Invalid API key"):
        await search_club_image("anything")


@pytest.mark.asyncio
async def test_http_status_error_raises(monkeypatch, async_client_factory):
    handler = lambda request: httpx.Response(429, json={})
    monkeypatch.setattr(image_search, "_http_client_factory", async_client_factory([handler]))

    with pytest.raises(ImageSearchError, match="failed: 429"):
        await search_club_image("anything")


@pytest.mark.asyncio
async def test_non_json_body_raises(monkeypatch, async_client_factory):
    handler = lambda request: httpx.Response(200, text="<html>rate limited</html>")
    monkeypatch.setattr(image_search, "_http_client_factory", async_client_factory([handler]))

    with pytest.raises(ImageSearchError, match="non-JSON"):
        await search_club_image("anything")


@pytest.mark.asyncio
async def test_transport_error_raises(monkeypatch, async_client_factory):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("boom", request=request)

    monkeypatch.setattr(image_search, "_http_client_factory", async_client_factory([handler]))

    with pytest.raises(ImageSearchError, match="request failed"):
        await search_club_image("anything")


@pytest.mark.asyncio
async def test_missing_key_raises():
    with patch.object(settings, "SERPAPI_API_KEY", ""):
        with pytest.raises(ServiceNotConfiguredError, match="SERPAPI_API_KEY"):
            await search_club_image("anything")
