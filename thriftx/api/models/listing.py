"""Listing data models"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import List, Optional, Union

from thriftx.models import Listing


class ListingCreate(BaseModel):
    """Add-item form payload"""
    title: str
    description: str = ""
    category: Optional[str] = None
    type: str = ""
    size: str = ""
    condition: str = "fair"
    tags: Union[str, List[str]] = Field(default_factory=list)
    points: Union[int, str] = 0
    location: str = ""
    images: List[str] = Field(default_factory=list)
    owner_id: Optional[str] = None
    owner_name: Optional[str] = None


class ListingResponse(BaseModel):
    """API response model for listings"""
    id: str
    title: str
    description: str
    category: Optional[str] = None
    item_type: str = ""
    size: str
    condition: str
    tags: List[str]
    points: int
    created_at: datetime
    view_count: int
    is_available: bool
    location: str
    images: List[str]
    owner_id: Optional[str] = None
    owner_name: Optional[str] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @classmethod
    def from_listing(cls, listing: Listing) -> "ListingResponse":
        return cls(**listing.to_dict())


class CategoryResponse(BaseModel):
    id: str
    name: str
