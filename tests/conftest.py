"""
Pytest configuration for ClubFit backend tests.

Sets up test environment and global fixtures.
"""
import os
from typing import Callable, Iterable
import pytest
from unittest.mock import MagicMock

import httpx

# Disable config validation during tests
# This allows tests to run without requiring real environment variables
os.environ["VALIDATE_CONFIG"] = "false"

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_KEY", "test-service-key")
os.environ.setdefault("GOOGLE_API_KEY", "test-google-api-key")
os.environ.setdefault("SERPAPI_API_KEY", "test-serpapi-key")

from clubfit.schemas.clubs import Club  # noqa: E402
from clubfit.services.image_proxy import failed_url_cache  # noqa: E402


def make_club(**overrides) -> Club:
    """Build a catalog club with sensible defaults."""
    data = {
        "id": "1",
        "slug": "test_brand_test_model",
        "brand": "Test Brand",
        "model": "Test Model",
        "category": "Game Improvement",
        "handicap_range": (10, 20),
        "key_strengths": ["Forgiveness"],
        "price_point": "Mid-range",
        "image_url": "https://example.com/club.jpg",
    }
    data.update(overrides)
    return Club(**data)


def make_club_row(**overrides) -> dict:
    """Build a ``club`` table row as Supabase returns it."""
    row = {
        "id": 1,
        "slug": "ping_g430",
        "brand": "Ping",
        "model": "G430",
        "category": "Game Improvement",
        "handicap_range_min": 12,
        "handicap_range_max": 30,
        "key_strengths": ["Forgiveness", "Distance"],
        "price_point": "Mid-range",
        "approximate_price": 999.0,
        "image_url": "https://example.com/g430.jpg",
        "created_at": "2026-01-01T00:00:00+00:00",
        "updated_at": "2026-01-01T00:00:00+00:00",
    }
    row.update(overrides)
    return row


@pytest.fixture
def supabase_client():
    """
    Mock Supabase client.
    Returns a MagicMock that simulates Supabase client behavior.
    """
    mock_client = MagicMock()
    return mock_client


@pytest.fixture(autouse=True)
def clear_failed_url_cache():
    """The image proxy remembers failures per process; isolate tests."""
    failed_url_cache.clear()
    yield
    failed_url_cache.clear()


@pytest.fixture
def club_factory():
    return make_club


@pytest.fixture
def club_row_factory():
    return make_club_row


def make_async_client_factory(
    handlers: Iterable[Callable[[httpx.Request], httpx.Response]],
) -> Callable[..., httpx.AsyncClient]:
    """One handler per client created; records the kwargs of each client."""
    handler_iter = iter(handlers)

    def factory(**kwargs) -> httpx.AsyncClient:
        try:
            handler = next(handler_iter)
        except StopIteration as exc:
            raise AssertionError("unexpected extra HTTP call") from exc
        factory.calls.append(kwargs)
        return httpx.AsyncClient(
            transport=httpx.MockTransport(handler),
            timeout=kwargs.get("timeout", 10.0),
        )

    factory.calls = []
    return factory


@pytest.fixture
def async_client_factory():
    return make_async_client_factory
