"""Tests for the Postgres repositories against a mocked asyncpg pool."""

import pytest
import asyncpg
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from thriftx.drafts import ListingDraft
from thriftx.error_handling import ListingNotFoundError, RepositoryError
from thriftx.models import Condition
from thriftx.repository import PostgresFavoritesRepository, PostgresListingRepository


ROW = {
    "id": "abc",
    "title": "Vintage Denim Jacket",
    "description": "Classic blue denim",
    "category_id": "outerwear",
    "category_name": "Outerwear",
    "item_type": "Jacket",
    "size": "M",
    "condition": "excellent",
    "tags": ["vintage", "denim"],
    "points": 45,
    "location": "New York, NY",
    "images": [],
    "user_id": "user1",
    "owner_name": "Sarah Johnson",
    "is_available": True,
    "view_count": 3,
    "created_at": datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc),
    "updated_at": datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc),
}


@pytest.fixture
def conn():
    conn = MagicMock()
    conn.fetch = AsyncMock(return_value=[ROW])
    conn.fetchrow = AsyncMock(return_value=ROW)
    conn.fetchval = AsyncMock(return_value="outerwear")
    conn.execute = AsyncMock(return_value="UPDATE 1")
    return conn


@pytest.fixture
def pool(conn):
    pool = MagicMock()
    pool.acquire.return_value.__aenter__.return_value = conn
    return pool


@pytest.mark.asyncio
async def test_fetch_normalizes_rows(pool, conn):
    listings = await PostgresListingRepository(pool).fetch_available_listings()

    assert len(listings) == 1
    listing = listings[0]
    assert listing.category == "Outerwear"
    assert listing.condition is Condition.EXCELLENT
    assert listing.tags == ("vintage", "denim")
    assert listing.owner_name == "Sarah Johnson"
    assert "is_available = TRUE" in conn.fetch.await_args.args[0]


@pytest.mark.asyncio
async def test_create_listing_ensures_category(pool, conn):
    draft = ListingDraft(title="Vintage Denim Jacket", category="Outerwear", tags=("vintage",), points=45)

    listing = await PostgresListingRepository(pool).create_listing(draft)

    assert listing.id == "abc"
    category_insert = conn.execute.await_args_list[0].args
    assert "INSERT INTO categories" in category_insert[0]
    assert category_insert[1:] == ("outerwear", "Outerwear")
    item_insert = conn.execute.await_args_list[1].args
    assert "INSERT INTO items" in item_insert[0]
    assert item_insert[4] == "outerwear"
    conn.transaction.assert_called_once()


@pytest.mark.asyncio
async def test_get_missing_listing_is_none(pool, conn):
    conn.fetchrow.return_value = None

    assert await PostgresListingRepository(pool).get_listing("nope") is None


@pytest.mark.asyncio
@pytest.mark.parametrize("status,expected", [("UPDATE 1", True), ("UPDATE 0", False)])
async def test_increment_view_count_reads_status(pool, conn, status, expected):
    conn.execute.return_value = status

    assert await PostgresListingRepository(pool).increment_view_count("abc") is expected


@pytest.mark.asyncio
async def test_connection_failure_is_retryable(pool):
    pool.acquire.side_effect = OSError("connection refused")

    with pytest.raises(RepositoryError) as exc_info:
        await PostgresListingRepository(pool).fetch_available_listings()

    assert exc_info.value.retryable is True


@pytest.mark.asyncio
async def test_server_error_is_not_retryable(pool, conn):
    conn.fetch.side_effect = asyncpg.PostgresError("relation \"items\" does not exist")

    with pytest.raises(RepositoryError) as exc_info:
        await PostgresListingRepository(pool).fetch_available_listings()

    assert exc_info.value.retryable is False


@pytest.mark.asyncio
async def test_favorites(pool, conn):
    favorites = PostgresFavoritesRepository(pool)

    conn.execute.return_value = "INSERT 0 1"
    assert await favorites.add_favorite("u1", "abc") is True
    conn.execute.return_value = "INSERT 0 0"
    assert await favorites.add_favorite("u1", "abc") is False

    conn.execute.return_value = "DELETE 1"
    assert await favorites.remove_favorite("u1", "abc") is True

    conn.fetchval.return_value = None
    assert await favorites.is_favorite("u1", "abc") is False

    assert [l.id for l in await favorites.list_favorites("u1")] == ["abc"]


@pytest.mark.asyncio
async def test_fetch_by_owner_filters_on_user(pool, conn):
    listings = await PostgresListingRepository(pool).fetch_listings_by_owner("user1")

    assert [l.id for l in listings] == ["abc"]
    assert listings[0].item_type == "Jacket"
    query, owner = conn.fetch.await_args.args
    assert "i.user_id = $1" in query
    assert "is_available" not in query
    assert owner == "user1"


@pytest.mark.asyncio
async def test_favorite_of_missing_item_is_not_found(pool, conn):
    conn.execute.side_effect = asyncpg.ForeignKeyViolationError("favorites_item_id_fkey")

    with pytest.raises(ListingNotFoundError) as exc_info:
        await PostgresFavoritesRepository(pool).add_favorite("u1", "nope")

    assert exc_info.value.listing_id == "nope"


@pytest.mark.asyncio
async def test_other_favorite_server_errors_are_not_not_found(pool, conn):
    conn.execute.side_effect = asyncpg.PostgresError("permission denied for table favorites")

    with pytest.raises(RepositoryError) as exc_info:
        await PostgresFavoritesRepository(pool).add_favorite("u1", "abc")

    assert not isinstance(exc_info.value, ListingNotFoundError)
    assert exc_info.value.retryable is False
