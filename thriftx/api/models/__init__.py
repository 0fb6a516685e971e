"""Data models for the thriftX API"""

from .listing import CategoryResponse, ListingCreate, ListingResponse
from .browse import BrowseResult, FilterOptions, SortOption
from .ai import (
    CategorizeRequest,
    DescriptionRequest,
    GenerateRequest,
    GenerateResponse,
    SuggestionResponse,
)

__all__ = [
    "CategoryResponse",
    "ListingCreate",
    "ListingResponse",
    "BrowseResult",
    "FilterOptions",
    "SortOption",
    "CategorizeRequest",
    "DescriptionRequest",
    "GenerateRequest",
    "GenerateResponse",
    "SuggestionResponse",
]
