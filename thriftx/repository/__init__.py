"""
Repository module for thriftX.

Listing and favorites storage behind a common async interface.
"""

from .base import FavoritesRepository, ListingRepository
from .json_repository import JsonFileListingRepository
from .memory import InMemoryFavoritesRepository, InMemoryListingRepository, listing_from_draft
from .postgres import PostgresFavoritesRepository, PostgresListingRepository

__all__ = [
    'FavoritesRepository',
    'ListingRepository',
    'JsonFileListingRepository',
    'InMemoryFavoritesRepository',
    'InMemoryListingRepository',
    'PostgresFavoritesRepository',
    'PostgresListingRepository',
    'listing_from_draft',
]
