"""
Database connection and initialization.
"""

import asyncpg
import redis.asyncio as redis
from typing import Optional
import logging

from thriftx.config import get_app_settings

logger = logging.getLogger(__name__)

# Global connection pools
pg_pool: Optional[asyncpg.Pool] = None
redis_client: Optional[redis.Redis] = None


async def init_db():
    """Initialize database connections"""
    global pg_pool, redis_client
    settings = get_app_settings()

    # PostgreSQL
    try:
        pg_pool = await asyncpg.create_pool(
            settings.database.url,
            min_size=settings.database.min_pool_size,
            max_size=settings.database.max_pool_size,
        )
        logger.info("PostgreSQL connection pool created")

        await create_tables()
    except Exception as e:
        logger.error(f"Failed to connect to PostgreSQL: {e}")
        raise

    # Redis
    if not settings.cache.enabled:
        logger.info("Listing cache disabled")
        return

    try:
        redis_client = redis.from_url(settings.cache.redis_url, decode_responses=True)
        await redis_client.ping()
        logger.info("Redis connection established")
    except Exception as e:
        logger.error(f"Failed to connect to Redis: {e}")
        raise


async def close_db():
    """Close database connections"""
    global pg_pool, redis_client

    if pg_pool:
        await pg_pool.close()
        pg_pool = None
        logger.info("PostgreSQL connection pool closed")

    if redis_client:
        await redis_client.aclose()
        redis_client = None
        logger.info("Redis connection closed")


async def create_tables(pool: Optional[asyncpg.Pool] = None):
    """Create the tables the repositories use if they don't exist"""
    async with (pool or pg_pool).acquire() as conn:
        await conn.execute("""
            CREATE TABLE IF NOT EXISTS categories (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL UNIQUE
            )
        """)

        await conn.execute("""
            CREATE TABLE IF NOT EXISTS profiles (
                id TEXT PRIMARY KEY,
                full_name TEXT
            )
        """)

        await conn.execute("""
            CREATE TABLE IF NOT EXISTS items (
                id TEXT PRIMARY KEY,
                title TEXT NOT NULL,
                description TEXT NOT NULL DEFAULT '',
                category_id TEXT REFERENCES categories(id),
                item_type TEXT NOT NULL DEFAULT '',
                size TEXT NOT NULL DEFAULT '',
                condition TEXT NOT NULL DEFAULT 'fair',
                tags TEXT[] NOT NULL DEFAULT '{}',
                points INTEGER NOT NULL DEFAULT 0 CHECK (points >= 0),
                location TEXT NOT NULL DEFAULT '',
                images TEXT[] NOT NULL DEFAULT '{}',
                user_id TEXT,
                is_available BOOLEAN NOT NULL DEFAULT TRUE,
                view_count INTEGER NOT NULL DEFAULT 0 CHECK (view_count >= 0),
                created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
                updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
            )
        """)

        await conn.execute("""
            CREATE INDEX IF NOT EXISTS idx_items_available_created ON items(is_available, created_at DESC);
        """)

        await conn.execute("""
            CREATE TABLE IF NOT EXISTS favorites (
                user_id TEXT NOT NULL,
                item_id TEXT NOT NULL REFERENCES items(id) ON DELETE CASCADE,
                created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
                PRIMARY KEY (user_id, item_id)
            )
        """)

        logger.info("Database tables created/verified")


def get_pg_pool() -> asyncpg.Pool:
    """Get PostgreSQL connection pool"""
    if pg_pool is None:
        raise RuntimeError("Database not initialized")
    return pg_pool


def get_redis() -> Optional[redis.Redis]:
    """Get Redis client, None when the cache is disabled"""
    return redis_client
