"""
Listing drafts: the input of the create-listing operation.

A draft is what the add-item form produces before the repository assigns an
id and timestamps.
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Tuple

from thriftx.error_handling import ListingValidationError
from thriftx.models import Condition
from thriftx.normalization import parse_condition, parse_tags


@dataclass(frozen=True)
class ListingDraft:
    """Validated fields for a new listing.

    Attributes:
        title: Required, non-blank
        description: Free text, may be filled in by the AI assistant
        category: Category name
        item_type: Sub-type within the category (e.g. "Jacket")
        size: Size label
        condition: Canonical condition
        tags: Tags in display order
        points: Non-negative points value
        location: Where the item is
        images: Image URLs
        owner_id: Uploader user id
        owner_name: Uploader display name
    """
    title: str
    description: str = ""
    category: Optional[str] = None
    item_type: str = ""
    size: str = ""
    condition: Condition = Condition.FAIR
    tags: Tuple[str, ...] = ()
    points: int = 0
    location: str = ""
    images: Tuple[str, ...] = field(default_factory=tuple)
    owner_id: Optional[str] = None
    owner_name: Optional[str] = None

    def __post_init__(self):
        if not self.title or not self.title.strip():
            raise ListingValidationError("Title is required")
        if self.points < 0:
            raise ListingValidationError("Points cannot be negative")
        object.__setattr__(self, "title", self.title.strip())
        object.__setattr__(self, "condition", parse_condition(self.condition))
        object.__setattr__(self, "tags", parse_tags(self.tags))
        object.__setattr__(self, "images", parse_tags(self.images))

    @classmethod
    def from_form(cls, **fields: Any) -> "ListingDraft":
        """Build a draft from raw form values.

        Condition labels like "Like New" are mapped, tags may be a
        comma-separated string, and points may be a numeric string.

        Raises:
            ListingValidationError: If a field cannot be accepted
        """
        points = fields.get("points", 0)
        if points in (None, ""):
            points = 0
        try:
            points = int(points)
        except (TypeError, ValueError):
            raise ListingValidationError(f"Points must be a whole number, got {points!r}")

        category = fields.get("category") or None
        return cls(
            title=str(fields.get("title") or ""),
            description=str(fields.get("description") or ""),
            category=category.strip() if isinstance(category, str) else category,
            item_type=str(fields.get("item_type") or fields.get("type") or ""),
            size=str(fields.get("size") or ""),
            condition=fields.get("condition") or Condition.FAIR,
            tags=fields.get("tags") or (),
            points=points,
            location=str(fields.get("location") or ""),
            images=fields.get("images") or (),
            owner_id=fields.get("owner_id"),
            owner_name=fields.get("owner_name"),
        )
