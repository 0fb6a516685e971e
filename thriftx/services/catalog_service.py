"""
Catalog service - the calling layer around the catalog query engine.

Fetches the available-listing collection (cache first, repository second),
then hands it to the query engine together with a fresh FilterConfig.
"""

import logging
from typing import List, Optional

from thriftx.cache import ListingCache
from thriftx.drafts import ListingDraft
from thriftx.error_handling import ErrorHandler
from thriftx.filtering import CatalogQuery
from thriftx.models import CatalogResult, Category, FilterConfig, Listing
from thriftx.repository import ListingRepository

logger = logging.getLogger(__name__)


class CatalogService:
    """Coordinates listing fetches, caching and catalog queries."""

    def __init__(
        self,
        repository: ListingRepository,
        cache: Optional[ListingCache] = None,
        error_handler: Optional[ErrorHandler] = None,
        query: Optional[CatalogQuery] = None
    ):
        self.repository = repository
        self.cache = cache
        self.error_handler = error_handler or ErrorHandler()
        self.query = query or CatalogQuery()

    async def fetch_listings(self) -> List[Listing]:
        """
        Fetch the available listings.

        Returns:
            Available listings, newest first

        Raises:
            RepositoryError: If the repository still fails after retries
        """
        if self.cache:
            cached = await self.cache.get()
            if cached is not None:
                logger.debug(f"Cache hit: {len(cached)} listings")
                return cached

        listings = await self.error_handler.retry_with_backoff(
            self.repository.fetch_available_listings
        )
        logger.info(f"Fetched {len(listings)} available listings")

        if self.cache:
            await self.cache.set(listings)
        return listings

    async def browse(self, config: FilterConfig) -> CatalogResult:
        """Run one catalog query against the current collection.

        A failed fetch raises before the query engine is invoked.
        """
        listings = await self.fetch_listings()
        result = self.query.run(listings, config)
        logger.debug(
            f"Query {config} -> {result.total_count} listings "
            f"({result.active_filter_count} filters active)"
        )
        return result

    async def create_listing(self, draft: ListingDraft) -> Listing:
        listing = await self.repository.create_listing(draft)
        if self.cache:
            await self.cache.invalidate()
        return listing

    async def view_listing(self, listing_id: str) -> Optional[Listing]:
        """Return a listing for its detail view, counting the view.

        Returns:
            The listing with its updated view count, or None if missing
        """
        counted = await self.repository.increment_view_count(listing_id)
        if not counted:
            return None
        if self.cache:
            # most-viewed ordering reads view counts from the cached collection
            await self.cache.invalidate()
        return await self.repository.get_listing(listing_id)

    async def listings_by_owner(self, owner_id: str) -> List[Listing]:
        """Every listing of one owner for their dashboard, newest first.

        Bypasses the cache, which only holds available listings.
        """
        return await self.error_handler.retry_with_backoff(
            self.repository.fetch_listings_by_owner, owner_id
        )

    async def categories(self) -> List[Category]:
        return await self.error_handler.retry_with_backoff(self.repository.list_categories)
