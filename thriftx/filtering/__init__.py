"""
Filtering module for catalog listings.

This module provides the catalog query engine that filters and orders
listings for the browse view.
"""

from .catalog_query import CatalogQuery, filter_sort, active_filter_count, run_query

__all__ = ['CatalogQuery', 'filter_sort', 'active_filter_count', 'run_query']
