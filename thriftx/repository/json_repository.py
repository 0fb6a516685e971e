"""
JSON file persistence for listings.

Used by the CLI and the seed script: the file holds a list of raw listing
records in either storage or client shape, normalized on load.
"""

import json
import logging
from pathlib import Path
from typing import List, Optional, Union

from thriftx.drafts import ListingDraft
from thriftx.error_handling import ListingValidationError, RepositoryError
from thriftx.models import Listing
from thriftx.normalization import normalize_listings

from .memory import InMemoryListingRepository

logger = logging.getLogger(__name__)


class JsonFileListingRepository(InMemoryListingRepository):
    """Listing repository persisted to a JSON file.

    The file is read lazily on first access and rewritten after every
    create or view-count update.
    """

    def __init__(self, path: Union[str, Path]):
        super().__init__()
        self.path = Path(path)
        self._loaded = False

    def _load(self) -> None:
        if self._loaded:
            return

        if not self.path.exists():
            logger.info(f"Catalog file {self.path} not found, starting empty")
            self._loaded = True
            return

        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise RepositoryError(f"Failed to read catalog file {self.path}: {e}", retryable=False)

        records = data.get("listings", []) if isinstance(data, dict) else data
        if not isinstance(records, list):
            raise RepositoryError(f"Catalog file {self.path} must contain a list of listings", retryable=False)

        try:
            listings = normalize_listings(records)
        except ListingValidationError as e:
            raise RepositoryError(f"Invalid record in {self.path}: {e}", retryable=False)

        self._listings = {listing.id: listing for listing in listings}
        self._loaded = True
        logger.debug(f"Loaded {len(self._listings)} listings from {self.path}")

    def _save(self) -> None:
        payload = [listing.to_dict() for listing in self._listings.values()]
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise RepositoryError(f"Failed to write catalog file {self.path}: {e}")

    async def fetch_available_listings(self) -> List[Listing]:
        self._load()
        return await super().fetch_available_listings()

    async def fetch_listings_by_owner(self, owner_id: str) -> List[Listing]:
        self._load()
        return await super().fetch_listings_by_owner(owner_id)

    async def create_listing(self, draft: ListingDraft) -> Listing:
        self._load()
        listing = await super().create_listing(draft)
        self._save()
        return listing

    async def get_listing(self, listing_id: str) -> Optional[Listing]:
        self._load()
        return await super().get_listing(listing_id)

    async def increment_view_count(self, listing_id: str) -> bool:
        self._load()
        updated = await super().increment_view_count(listing_id)
        if updated:
            self._save()
        return updated

    async def all_listings(self) -> List[Listing]:
        """Every stored listing, available or not, in file order."""
        self._load()
        return list(self._listings.values())
