"""Services coordinating repositories, caching and the query engine."""

from .catalog_service import CatalogService

__all__ = ['CatalogService']
