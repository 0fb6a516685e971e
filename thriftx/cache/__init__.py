"""Caching for fetched listing collections."""

from .listing_cache import ListingCache

__all__ = ['ListingCache']
