#!/usr/bin/env python3
"""Seed the Postgres catalog from a JSON listings file (the bundled sample by default)."""

import asyncio
import argparse
import os
import sys

import asyncpg

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from thriftx.api.db import create_tables
from thriftx.config import get_app_settings
from thriftx.error_handling import RepositoryError
from thriftx.repository import JsonFileListingRepository


async def seed_listings(path: str, clear: bool) -> int:
    settings = get_app_settings()
    repo = JsonFileListingRepository(path)

    try:
        listings = await repo.all_listings()
    except RepositoryError as e:
        print(f'Error: {e}')
        return 1

    try:
        pool = await asyncpg.create_pool(settings.database.url, min_size=1, max_size=2)
    except (OSError, asyncpg.PostgresError) as e:
        print(f'Error: {e}')
        return 1

    try:
        await create_tables(pool)
        async with pool.acquire() as conn:
            async with conn.transaction():
                if clear:
                    # Favorites go with their items (ON DELETE CASCADE)
                    result = await conn.execute('DELETE FROM items')
                    print(f'Cleared items table: {result}')

                for listing in listings:
                    category_id = None
                    if listing.category:
                        await conn.execute(
                            'INSERT INTO categories (id, name) VALUES ($1, $2) ON CONFLICT (name) DO NOTHING',
                            listing.category.lower(), listing.category
                        )
                        category_id = await conn.fetchval(
                            'SELECT id FROM categories WHERE name = $1', listing.category
                        )

                    if listing.owner_id:
                        await conn.execute("""
                            INSERT INTO profiles (id, full_name) VALUES ($1, $2)
                            ON CONFLICT (id) DO UPDATE SET full_name = COALESCE(EXCLUDED.full_name, profiles.full_name)
                        """, listing.owner_id, listing.owner_name)

                    await conn.execute("""
                        INSERT INTO items
                            (id, title, description, category_id, item_type, size, condition, tags, points,
                             location, images, user_id, is_available, view_count, created_at, updated_at)
                        VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10, $11, $12, $13, $14, $15, $16)
                        ON CONFLICT (id) DO NOTHING
                    """,
                        listing.id,
                        listing.title,
                        listing.description,
                        category_id,
                        listing.item_type,
                        listing.size,
                        listing.condition.value,
                        list(listing.tags),
                        listing.points,
                        listing.location,
                        list(listing.images),
                        listing.owner_id,
                        listing.is_available,
                        listing.view_count,
                        listing.created_at,
                        listing.updated_at or listing.created_at,
                    )

        print(f'Seeded {len(listings)} listings from {path}')
        return 0

    except asyncpg.PostgresError as e:
        print(f'Error: {e}')
        return 1
    finally:
        await pool.close()


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument('--file', default=None, help='Listings JSON file')
    parser.add_argument('--clear', action='store_true', help='Delete existing items first')
    args = parser.parse_args()

    sys.exit(asyncio.run(seed_listings(args.file or get_app_settings().catalog_file, args.clear)))
