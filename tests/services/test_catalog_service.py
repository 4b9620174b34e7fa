"""
Tests for catalog persistence (row mapping, reads, enrichment insert, reseed).
"""

from unittest.mock import MagicMock

import pytest

from clubfit.data import SEED_CLUBS
from clubfit.schemas.clubs import ClubAttributes
from clubfit.services.catalog_service import (
    club_from_row,
    club_to_row,
    get_all_clubs,
    get_clubs_by_ids,
    insert_club,
    reseed_catalog,
)


def _query(data=None):
    query = MagicMock()
    for method in ("select", "order", "in_", "insert", "delete", "gte"):
        getattr(query, method).return_value = query
    query.execute.return_value = MagicMock(data=data)
    return query


class TestRowMapping:
    def test_club_from_row(self, club_row_factory):
        club = club_from_row(club_row_factory(id=7))

        assert club.id == "7"
        assert club.slug == "ping_g430"
        assert club.handicap_range == (12, 30)
        assert club.approximate_price == 999.0

    def test_club_from_row_without_slug(self, club_row_factory):
        club = club_from_row(club_row_factory(slug=None, brand="Cobra", model="King Tec"))
        assert club.slug == "cobra_king_tec"

    def test_club_to_row(self):
        row = club_to_row(SEED_CLUBS[0])

        assert row == {
            "slug": "titleist_t200_2023",
            "brand": "Titleist",
            "model": "T200 (2023)",
            "category": "Player's Distance",
            "handicap_range_min": 5,
            "handicap_range_max": 15,
            "key_strengths": ["Distance", "Feel"],
            "price_point": "Premium",
            "approximate_price": None,
            "image_url": SEED_CLUBS[0].image_url,
        }


class TestReads:
    @pytest.mark.asyncio
    async def test_get_all_clubs_orders_by_id(self, supabase_client, club_row_factory):
        query = _query(data=[club_row_factory(id=1), club_row_factory(id=2, slug="other")])
        supabase_client.table.return_value = query

        clubs = await get_all_clubs(supabase_client)

        supabase_client.table.assert_called_with("club")
        query.order.assert_called_once_with("id")
        assert [club.id for club in clubs] == ["1", "2"]

    @pytest.mark.asyncio
    async def test_get_all_clubs_empty(self, supabase_client):
        supabase_client.table.return_value = _query(data=[])
        assert await get_all_clubs(supabase_client) == []

    @pytest.mark.asyncio
    async def test_get_clubs_by_ids_keeps_requested_order(self, supabase_client, club_row_factory):
        query = _query(data=[club_row_factory(id=1), club_row_factory(id=3), club_row_factory(id=2)])
        supabase_client.table.return_value = query

        clubs = await get_clubs_by_ids(supabase_client, [2, 9, 1, 3])

        query.in_.assert_called_once_with("id", [2, 9, 1, 3])
        assert [club.id for club in clubs] == ["2", "1", "3"]

    @pytest.mark.asyncio
    async def test_get_clubs_by_ids_empty(self, supabase_client):
        assert await get_clubs_by_ids(supabase_client, []) == []
        supabase_client.table.assert_not_called()


class TestInsertClub:
    @pytest.fixture
    def attributes(self):
        return ClubAttributes(
            brand="Cobra",
            model="King Tec",
            category="Player's Distance",
            handicap_range_min=5,
            handicap_range_max=18,
            key_strengths=["Distance"],
            price_point="Mid-range",
            approximate_price=1099,
        )

    @pytest.mark.asyncio
    async def test_insert_computes_slug(self, supabase_client, attributes, club_row_factory):
        query = _query(data=[club_row_factory(
            id=42,
            slug="cobra_king_tec",
            brand="Cobra",
            model="King Tec",
            category="Player's Distance",
            handicap_range_min=5,
            handicap_range_max=18,
            key_strengths=["Distance"],
            image_url="https://img.example.com/kingtec.jpg",
        )])
        supabase_client.table.return_value = query

        club = await insert_club(supabase_client, attributes, image_url="https://img.example.com/kingtec.jpg")

        payload = query.insert.call_args.args[0]
        assert payload["slug"] == "cobra_king_tec"
        assert payload["handicap_range_min"] == 5
        assert payload["image_url"] == "https://img.example.com/kingtec.jpg"
        assert club.id == "42"
        assert club.slug == "cobra_king_tec"

    @pytest.mark.asyncio
    async def test_insert_without_returned_row_raises(self, supabase_client, attributes):
        supabase_client.table.return_value = _query(data=[])

        with pytest.raises(RuntimeError, match="cobra_king_tec"):
            await insert_club(supabase_client, attributes, image_url="https://x/y.jpg")


class TestReseedCatalog:
    @pytest.mark.asyncio
    async def test_clears_cache_and_catalog_then_inserts(self, supabase_client):
        query = _query(data=[{"id": i} for i in range(len(SEED_CLUBS))])
        supabase_client.table.return_value = query

        inserted = await reseed_catalog(supabase_client, SEED_CLUBS)

        assert inserted == 6
        tables = [call.args[0] for call in supabase_client.table.call_args_list]
        assert tables == ["recommendation_cache", "club", "club"]
        assert query.delete.call_count == 2
        query.gte.assert_called_with("id", 0)
        rows = query.insert.call_args.args[0]
        assert [row["slug"] for row in rows] == [club.slug for club in SEED_CLUBS]

    @pytest.mark.asyncio
    async def test_delete_failure_propagates(self, supabase_client):
        query = _query()
        query.execute.side_effect = Exception("relation \"club\" does not exist")
        supabase_client.table.return_value = query

        with pytest.raises(Exception, match="does not exist"):
            await reseed_catalog(supabase_client, SEED_CLUBS)
