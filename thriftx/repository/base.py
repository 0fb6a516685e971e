"""Interfaces for listing and favorites storage."""

from typing import List, Optional

from thriftx.drafts import ListingDraft
from thriftx.models import Category, Listing


class ListingRepository:
    """Interface for listing storage.

    Implementations raise RepositoryError on failure and always return
    canonical Listing objects.
    """

    async def fetch_available_listings(self) -> List[Listing]:
        # Available listings only, newest first
        raise NotImplementedError

    async def fetch_listings_by_owner(self, owner_id: str) -> List[Listing]:
        # Every listing of one owner, available or not, newest first
        raise NotImplementedError

    async def create_listing(self, draft: ListingDraft) -> Listing:
        raise NotImplementedError

    async def get_listing(self, listing_id: str) -> Optional[Listing]:
        raise NotImplementedError

    async def increment_view_count(self, listing_id: str) -> bool:
        raise NotImplementedError

    async def list_categories(self) -> List[Category]:
        raise NotImplementedError


class FavoritesRepository:
    """Interface for per-user favorite listings."""

    async def list_favorites(self, user_id: str) -> List[Listing]:
        raise NotImplementedError

    async def add_favorite(self, user_id: str, listing_id: str) -> bool:
        # False when the favorite already exists
        raise NotImplementedError

    async def remove_favorite(self, user_id: str, listing_id: str) -> bool:
        raise NotImplementedError

    async def is_favorite(self, user_id: str, listing_id: str) -> bool:
        raise NotImplementedError
