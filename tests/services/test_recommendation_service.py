"""
Tests for the recommendation pipeline.

Persistence and Gemini calls are mocked at the service module boundary;
reconciliation and ranking run for real against a numbered copy of the
seed catalog:

    1 Titleist T200   2 Callaway Rogue ST Max   3 Mizuno JPX 923 Forged
    4 TaylorMade P790 5 Ping G430               6 Wilson Staff Model Blade
"""

from contextlib import contextmanager
from unittest.mock import AsyncMock, patch

import pytest

from clubfit.config import settings
from clubfit.data import SEED_CLUBS
from clubfit.schemas.recommendations import ClubSuggestion, UserInput
from clubfit.services.recommendation_service import get_club_recommendations
from clubfit.utils.errors import LLMResponseError

MODULE = "clubfit.services.recommendation_service"

CATALOG = [club.model_copy(update={"id": str(i)}) for i, club in enumerate(SEED_CLUBS, start=1)]


def _by_slug(slug):
    return next(club for club in CATALOG if club.slug == slug)


@contextmanager
def pipeline_mocks(suggested=(), cached_ids=None, cached_clubs=(), enriched=(), catalog=CATALOG):
    mocks = {
        "get_cached_club_ids": AsyncMock(return_value=cached_ids),
        "get_clubs_by_ids": AsyncMock(return_value=list(cached_clubs)),
        "get_all_clubs": AsyncMock(return_value=list(catalog)),
        "suggest_club_models": AsyncMock(
            return_value=ClubSuggestion(model_names=list(suggested), reasoning="test")
        ),
        "enrich_missing_models": AsyncMock(return_value=list(enriched)),
        "store_club_ids": AsyncMock(return_value=True),
        "explain_recommendation": AsyncMock(
            side_effect=lambda user_input, club: f"{club.model} suits handicap {user_input.handicap}."
        ),
    }
    patchers = [patch(f"{MODULE}.{name}", new=mock) for name, mock in mocks.items()]
    for patcher in patchers:
        patcher.start()
    try:
        yield mocks
    finally:
        for patcher in patchers:
            patcher.stop()


@pytest.fixture
def mid_handicap():
    return UserInput(handicap=12, goal="Forgiveness", budget="Mid-range")


class TestCacheMiss:
    @pytest.mark.asyncio
    async def test_suggestions_are_reconciled_ranked_and_explained(self, supabase_client, mid_handicap):
        with pipeline_mocks(
            suggested=["Ping G430", "TaylorMade P790 (2023)", "Callaway Rogue ST Max"],
        ) as mocks:
            results = await get_club_recommendations(supabase_client, mid_handicap)

        # Rogue ST Max (15-30) does not cover handicap 12
        assert [r.slug for r in results] == ["ping_g430", "taylormade_p790_2023"]
        assert [r.badge for r in results] == ["Best Match", "Top Pick"]
        assert results[0].explanation == "G430 suits handicap 12."
        assert results[1].explanation == "P790 (2023) suits handicap 12."

        mocks["suggest_club_models"].assert_awaited_once()
        mocks["enrich_missing_models"].assert_not_awaited()
        mocks["store_club_ids"].assert_awaited_once()
        key, club_ids = mocks["store_club_ids"].call_args.args[1:]
        assert tuple(key) == (12, "Forgiveness", "Mid-range")
        assert club_ids == [5, 4, 2]

    @pytest.mark.asyncio
    async def test_unmatched_names_are_enriched(self, supabase_client, mid_handicap, club_factory):
        new_club = club_factory(
            id="7",
            slug="cobra_king_tec",
            brand="Cobra",
            model="King Tec",
            category="Player's Distance",
            handicap_range=(5, 18),
            key_strengths=["Forgiveness"],
            price_point="Mid-range",
        )
        with pipeline_mocks(suggested=["Ping G430", "Cobra King Tec"], enriched=[new_club]) as mocks:
            results = await get_club_recommendations(supabase_client, mid_handicap)

        args = mocks["enrich_missing_models"].call_args.args
        assert args[1] == ["Cobra King Tec"]
        assert {r.slug for r in results} == {"ping_g430", "cobra_king_tec"}
        assert mocks["store_club_ids"].call_args.args[2] == [5, 7]

    @pytest.mark.asyncio
    async def test_enrichment_skipped_without_search_key(self, supabase_client, mid_handicap):
        with patch.object(settings, "SERPAPI_API_KEY", ""), \
             pipeline_mocks(suggested=["Ping G430", "Cobra King Tec"]) as mocks:
            results = await get_club_recommendations(supabase_client, mid_handicap)

        mocks["enrich_missing_models"].assert_not_awaited()
        assert [r.slug for r in results] == ["ping_g430"]

    @pytest.mark.asyncio
    async def test_falls_back_to_full_catalog(self, supabase_client):
        user_input = UserInput(handicap=25, goal="Distance", budget="Budget")

        with pipeline_mocks(suggested=["Wilson Staff Model Blade"]) as mocks:
            results = await get_club_recommendations(supabase_client, user_input)

        assert [r.slug for r in results] == ["callaway_rogue_st_max", "ping_g430"]
        assert [r.match_score for r in results] == [65, 62]
        mocks["get_all_clubs"].assert_awaited_once()

    @pytest.mark.asyncio
    async def test_no_club_covers_handicap(self, supabase_client):
        user_input = UserInput(handicap=45, goal="Distance", budget="Budget")

        with pipeline_mocks(suggested=["Ping G430"]) as mocks:
            results = await get_club_recommendations(supabase_client, user_input)

        assert results == []
        mocks["explain_recommendation"].assert_not_awaited()


class TestTieOrder:
    @pytest.fixture
    def twin_catalog(self, club_factory):
        return [
            club_factory(id="1", slug="alpha_one", brand="Alpha", model="One"),
            club_factory(id="2", slug="beta_two", brand="Beta", model="Two"),
        ]

    @pytest.mark.asyncio
    async def test_equal_scores_follow_catalog_not_suggestion_order(
        self, supabase_client, mid_handicap, twin_catalog
    ):
        with pipeline_mocks(suggested=["Beta Two", "Alpha One"], catalog=twin_catalog):
            results = await get_club_recommendations(supabase_client, mid_handicap)

        assert results[0].match_score == results[1].match_score
        assert [r.slug for r in results] == ["alpha_one", "beta_two"]

    @pytest.mark.asyncio
    async def test_enriched_clubs_rank_after_catalog_ties(
        self, supabase_client, mid_handicap, twin_catalog, club_factory
    ):
        new_club = club_factory(id="3", slug="gamma_three", brand="Gamma", model="Three")
        with pipeline_mocks(
            suggested=["Gamma Three", "Beta Two"],
            enriched=[new_club],
            catalog=twin_catalog,
        ):
            results = await get_club_recommendations(supabase_client, mid_handicap)

        assert [r.slug for r in results] == ["beta_two", "gamma_three"]

    @pytest.mark.asyncio
    async def test_cached_ties_follow_id_order(self, supabase_client, mid_handicap, twin_catalog):
        reversed_hit = list(reversed(twin_catalog))
        with pipeline_mocks(cached_ids=[2, 1], cached_clubs=reversed_hit):
            results = await get_club_recommendations(supabase_client, mid_handicap)

        assert [r.slug for r in results] == ["alpha_one", "beta_two"]


class TestCacheHit:
    @pytest.mark.asyncio
    async def test_cached_candidates_skip_language_model(self, supabase_client, mid_handicap):
        cached = [_by_slug("taylormade_p790_2023"), _by_slug("ping_g430")]

        with pipeline_mocks(cached_ids=[4, 5], cached_clubs=cached) as mocks:
            results = await get_club_recommendations(supabase_client, mid_handicap)

        assert [r.slug for r in results] == ["ping_g430", "taylormade_p790_2023"]
        mocks["get_clubs_by_ids"].assert_awaited_once_with(supabase_client, [4, 5])
        mocks["suggest_club_models"].assert_not_awaited()
        mocks["get_all_clubs"].assert_not_awaited()
        mocks["store_club_ids"].assert_not_awaited()
        assert all(r.explanation for r in results)

    @pytest.mark.asyncio
    async def test_stale_cached_ids_are_a_miss(self, supabase_client, mid_handicap):
        with pipeline_mocks(cached_ids=[98, 99], cached_clubs=[], suggested=["Ping G430"]) as mocks:
            results = await get_club_recommendations(supabase_client, mid_handicap)

        mocks["suggest_club_models"].assert_awaited_once()
        assert [r.slug for r in results] == ["ping_g430"]

    @pytest.mark.asyncio
    async def test_personalized_requests_bypass_cache(self, supabase_client):
        user_input = UserInput(handicap=12, goal="Forgiveness", budget="Mid-range", preferred_brand="Ping")

        with pipeline_mocks(suggested=["Ping G430"]) as mocks:
            await get_club_recommendations(supabase_client, user_input)

        mocks["get_cached_club_ids"].assert_not_awaited()
        mocks["store_club_ids"].assert_not_awaited()


class TestErrors:
    @pytest.mark.asyncio
    async def test_language_model_errors_propagate(self, supabase_client, mid_handicap):
        with pipeline_mocks() as mocks:
            mocks["suggest_club_models"].side_effect = LLMResponseError("invalid JSON")
            with pytest.raises(LLMResponseError):
                await get_club_recommendations(supabase_client, mid_handicap)

        mocks["store_club_ids"].assert_not_awaited()

    @pytest.mark.asyncio
    async def test_explanation_errors_propagate(self, supabase_client, mid_handicap):
        with pipeline_mocks(suggested=["Ping G430"]) as mocks:
            mocks["explain_recommendation"].side_effect = RuntimeError("quota exceeded")
            with pytest.raises(RuntimeError, match="quota"):
                await get_club_recommendations(supabase_client, mid_handicap)
