"""
Redis cache for the available-listing collection.

The catalog service caches the fetched collection, not query results: the
query engine runs on every request against whatever collection it is given.
"""

import json
import logging
from typing import List, Optional

import redis.asyncio as redis

from thriftx.models import Listing

logger = logging.getLogger(__name__)


class ListingCache:
    """Cache the serialized listing collection under a single key."""

    CACHE_KEY = "thriftx:listings:available"

    def __init__(self, client: redis.Redis, ttl_seconds: int = 300):
        self.client = client
        self.ttl_seconds = ttl_seconds

    async def get(self) -> Optional[List[Listing]]:
        """
        Return the cached collection.

        Returns:
            Cached listings, or None on a miss or any cache failure
        """
        try:
            cached_data = await self.client.get(self.CACHE_KEY)
            if not cached_data:
                return None
            data = json.loads(cached_data)
            if not isinstance(data, list):
                logger.warning("Listing cache holds an unexpected payload, ignoring it")
                return None
            return [Listing.from_dict(item) for item in data]
        except (redis.RedisError, ValueError, TypeError, AttributeError) as e:
            # A broken cache is a miss
            logger.warning(f"Listing cache read failed: {e}")
            return None

    async def set(self, listings: List[Listing]) -> None:
        try:
            payload = json.dumps([listing.to_dict() for listing in listings])
            await self.client.set(self.CACHE_KEY, payload, ex=self.ttl_seconds)
        except redis.RedisError as e:
            logger.warning(f"Listing cache write failed: {e}")

    async def invalidate(self) -> None:
        try:
            await self.client.delete(self.CACHE_KEY)
        except redis.RedisError as e:
            logger.warning(f"Listing cache invalidation failed: {e}")
