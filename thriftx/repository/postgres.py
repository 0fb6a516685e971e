"""
Postgres-backed repositories.

The hosted backend is Postgres; these repositories talk to it through an
asyncpg connection pool and normalize every row at the boundary.
"""

import asyncio
import logging
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import List, Optional

import asyncpg

from thriftx.drafts import ListingDraft
from thriftx.error_handling import ListingNotFoundError, RepositoryError
from thriftx.models import Category, Listing
from thriftx.normalization import normalize_listing

from .base import FavoritesRepository, ListingRepository

logger = logging.getLogger(__name__)


LISTING_SELECT = """
    SELECT i.*, c.name AS category_name, p.full_name AS owner_name
    FROM items i
    LEFT JOIN categories c ON c.id = i.category_id
    LEFT JOIN profiles p ON p.id = i.user_id
"""


class _PostgresRepository:
    def __init__(self, pool: asyncpg.Pool):
        self.pool = pool

    @asynccontextmanager
    async def _connection(self, operation: str):
        """Acquire a connection and translate driver errors.

        Server-side errors (constraint violations, bad SQL) are not
        retryable; connection-level failures are.
        """
        try:
            async with self.pool.acquire() as conn:
                yield conn
        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError) as e:
            logger.error(f"Failed to {operation}: {e}")
            raise RepositoryError(
                f"Failed to {operation}: {e}",
                retryable=not isinstance(e, asyncpg.PostgresError)
            ) from e


class PostgresListingRepository(_PostgresRepository, ListingRepository):
    """Listing repository over the items/categories/profiles tables."""

    async def fetch_available_listings(self) -> List[Listing]:
        async with self._connection("fetch listings") as conn:
            rows = await conn.fetch(
                LISTING_SELECT + " WHERE i.is_available = TRUE ORDER BY i.created_at DESC"
            )
        logger.debug(f"Fetched {len(rows)} available listings")
        return [normalize_listing(dict(row)) for row in rows]

    async def fetch_listings_by_owner(self, owner_id: str) -> List[Listing]:
        async with self._connection(f"fetch listings of {owner_id}") as conn:
            rows = await conn.fetch(
                LISTING_SELECT + " WHERE i.user_id = $1 ORDER BY i.created_at DESC", owner_id
            )
        return [normalize_listing(dict(row)) for row in rows]

    async def create_listing(self, draft: ListingDraft) -> Listing:
        listing_id = str(uuid.uuid4())
        now = datetime.now(timezone.utc)

        async with self._connection("create listing") as conn:
            async with conn.transaction():
                category_id = None
                if draft.category:
                    category_id = await self._ensure_category(conn, draft.category)

                await conn.execute("""
                    INSERT INTO items
                        (id, title, description, category_id, item_type, size, condition,
                         tags, points, location, images, user_id, is_available,
                         view_count, created_at, updated_at)
                    VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10, $11, $12, TRUE, 0, $13, $13)
                """,
                    listing_id,
                    draft.title,
                    draft.description,
                    category_id,
                    draft.item_type,
                    draft.size,
                    draft.condition.value,
                    list(draft.tags),
                    draft.points,
                    draft.location,
                    list(draft.images),
                    draft.owner_id,
                    now,
                )

            row = await conn.fetchrow(LISTING_SELECT + " WHERE i.id = $1", listing_id)

        logger.info(f"Created listing {listing_id}: {draft.title}")
        return normalize_listing(dict(row))

    async def _ensure_category(self, conn: asyncpg.Connection, name: str) -> str:
        await conn.execute("""
            INSERT INTO categories (id, name) VALUES ($1, $2)
            ON CONFLICT (name) DO NOTHING
        """, name.lower(), name)
        return await conn.fetchval("SELECT id FROM categories WHERE name = $1", name)

    async def get_listing(self, listing_id: str) -> Optional[Listing]:
        async with self._connection(f"get listing {listing_id}") as conn:
            row = await conn.fetchrow(LISTING_SELECT + " WHERE i.id = $1", listing_id)
        return normalize_listing(dict(row)) if row else None

    async def increment_view_count(self, listing_id: str) -> bool:
        async with self._connection(f"update views of {listing_id}") as conn:
            status = await conn.execute(
                "UPDATE items SET view_count = view_count + 1 WHERE id = $1", listing_id
            )
        # asyncpg returns the command tag, e.g. "UPDATE 1"
        return status.endswith(" 1")

    async def list_categories(self) -> List[Category]:
        async with self._connection("fetch categories") as conn:
            rows = await conn.fetch("SELECT id, name FROM categories ORDER BY name")
        return [Category(id=row["id"], name=row["name"]) for row in rows]


class PostgresFavoritesRepository(_PostgresRepository, FavoritesRepository):
    """Favorites stored in the favorites table, joined back to items."""

    async def list_favorites(self, user_id: str) -> List[Listing]:
        async with self._connection(f"fetch favorites of {user_id}") as conn:
            rows = await conn.fetch("""
                SELECT i.*, c.name AS category_name, p.full_name AS owner_name
                FROM favorites f
                JOIN items i ON i.id = f.item_id
                LEFT JOIN categories c ON c.id = i.category_id
                LEFT JOIN profiles p ON p.id = i.user_id
                WHERE f.user_id = $1
                ORDER BY f.created_at
            """, user_id)
        return [normalize_listing(dict(row)) for row in rows]

    async def add_favorite(self, user_id: str, listing_id: str) -> bool:
        async with self._connection("add favorite") as conn:
            try:
                status = await conn.execute("""
                    INSERT INTO favorites (user_id, item_id, created_at)
                    VALUES ($1, $2, NOW())
                    ON CONFLICT (user_id, item_id) DO NOTHING
                """, user_id, listing_id)
            except asyncpg.ForeignKeyViolationError:
                # favorites.item_id references items.id
                raise ListingNotFoundError(listing_id)
        return status.endswith(" 1")

    async def remove_favorite(self, user_id: str, listing_id: str) -> bool:
        async with self._connection("remove favorite") as conn:
            status = await conn.execute(
                "DELETE FROM favorites WHERE user_id = $1 AND item_id = $2", user_id, listing_id
            )
        return status.endswith(" 1")

    async def is_favorite(self, user_id: str, listing_id: str) -> bool:
        async with self._connection("check favorite") as conn:
            found = await conn.fetchval(
                "SELECT 1 FROM favorites WHERE user_id = $1 AND item_id = $2", user_id, listing_id
            )
        return found is not None
