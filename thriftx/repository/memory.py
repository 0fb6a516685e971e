"""In-process repositories used by tests and demos."""

import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Set, Tuple

from thriftx.drafts import ListingDraft
from thriftx.error_handling import ListingNotFoundError
from thriftx.models import Category, Listing, CATEGORY_OPTIONS, ALL

from .base import FavoritesRepository, ListingRepository


def listing_from_draft(draft: ListingDraft, listing_id: Optional[str] = None) -> Listing:
    """Materialize a draft into a new, unviewed, available listing."""
    now = datetime.now(timezone.utc)
    return Listing(
        id=listing_id or str(uuid.uuid4()),
        title=draft.title,
        description=draft.description,
        category=draft.category,
        item_type=draft.item_type,
        size=draft.size,
        condition=draft.condition,
        tags=draft.tags,
        points=draft.points,
        created_at=now,
        view_count=0,
        is_available=True,
        location=draft.location,
        images=draft.images,
        owner_id=draft.owner_id,
        owner_name=draft.owner_name,
        updated_at=now,
    )


def default_categories() -> List[Category]:
    names = [name for name in CATEGORY_OPTIONS if name != ALL]
    return [Category(id=name.lower(), name=name) for name in sorted(names)]


class InMemoryListingRepository(ListingRepository):
    """Listing repository backed by a dict, preserving insertion order."""

    def __init__(
        self,
        listings: Iterable[Listing] = (),
        categories: Optional[List[Category]] = None
    ):
        self._listings: Dict[str, Listing] = {listing.id: listing for listing in listings}
        self._categories = categories if categories is not None else default_categories()

    async def fetch_available_listings(self) -> List[Listing]:
        available = [listing for listing in self._listings.values() if listing.is_available]
        return sorted(available, key=lambda listing: listing.created_at, reverse=True)

    async def fetch_listings_by_owner(self, owner_id: str) -> List[Listing]:
        owned = [listing for listing in self._listings.values() if listing.owner_id == owner_id]
        return sorted(owned, key=lambda listing: listing.created_at, reverse=True)

    async def create_listing(self, draft: ListingDraft) -> Listing:
        listing = listing_from_draft(draft)
        self._listings[listing.id] = listing
        return listing

    async def get_listing(self, listing_id: str) -> Optional[Listing]:
        return self._listings.get(listing_id)

    async def increment_view_count(self, listing_id: str) -> bool:
        listing = self._listings.get(listing_id)
        if listing is None:
            return False
        self._listings[listing_id] = replace(listing, view_count=listing.view_count + 1)
        return True

    async def list_categories(self) -> List[Category]:
        return list(self._categories)


class InMemoryFavoritesRepository(FavoritesRepository):
    """Favorites kept as (user_id, listing_id) pairs in insertion order."""

    def __init__(self, listings: ListingRepository):
        self.listings = listings
        self._pairs: List[Tuple[str, str]] = []
        self._index: Set[Tuple[str, str]] = set()

    async def list_favorites(self, user_id: str) -> List[Listing]:
        favorites = []
        for owner, listing_id in self._pairs:
            if owner != user_id:
                continue
            listing = await self.listings.get_listing(listing_id)
            if listing is not None:
                favorites.append(listing)
        return favorites

    async def add_favorite(self, user_id: str, listing_id: str) -> bool:
        if await self.listings.get_listing(listing_id) is None:
            raise ListingNotFoundError(listing_id)
        key = (user_id, listing_id)
        if key in self._index:
            return False
        self._index.add(key)
        self._pairs.append(key)
        return True

    async def remove_favorite(self, user_id: str, listing_id: str) -> bool:
        key = (user_id, listing_id)
        if key not in self._index:
            return False
        self._index.discard(key)
        self._pairs.remove(key)
        return True

    async def is_favorite(self, user_id: str, listing_id: str) -> bool:
        return (user_id, listing_id) in self._index
