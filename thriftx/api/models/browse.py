"""Browse view data models"""

from pydantic import BaseModel
from typing import List

from .listing import ListingResponse


class BrowseResult(BaseModel):
    """Filtered catalog with the counts the grid displays"""
    listings: List[ListingResponse]
    total_count: int
    active_filter_count: int


class SortOption(BaseModel):
    value: str
    label: str


class FilterOptions(BaseModel):
    """Choices offered by the browse filters"""
    categories: List[str]
    sizes: List[str]
    conditions: List[str]
    sort_options: List[SortOption]
