"""
Data models for the thriftX catalog.

This module defines the canonical listing shape and the filter/sort
configuration consumed by the catalog query engine.
"""

from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional, Tuple
import re


ALL = "All"

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_WHOLE_NUMBER = re.compile(r"[+-]?\d+")


class Condition(str, Enum):
    """Wear condition of a listing."""
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"

    @classmethod
    def parse(cls, value) -> "Condition":
        """Coerce any stored value to a condition, defaulting to FAIR.

        Args:
            value: Enum member, canonical string, or anything else

        Returns:
            Matching Condition, or Condition.FAIR for unknown input
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                return cls.FAIR
        return cls.FAIR


class SortKey(str, Enum):
    """Catalog ordering options."""
    NEWEST = "newest"
    OLDEST = "oldest"
    POINTS_HIGH = "points-high"
    POINTS_LOW = "points-low"
    MOST_VIEWED = "most-viewed"

    @classmethod
    def parse(cls, value) -> "SortKey":
        """Coerce a UI sort value, falling back to NEWEST."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.NEWEST


SORT_LABELS = {
    SortKey.NEWEST: "Newest First",
    SortKey.OLDEST: "Oldest First",
    SortKey.POINTS_HIGH: "Points: High to Low",
    SortKey.POINTS_LOW: "Points: Low to High",
    SortKey.MOST_VIEWED: "Most Viewed",
}

CATEGORY_OPTIONS = [ALL, "Outerwear", "Dresses", "Knitwear", "Accessories", "Tops", "Shoes", "Bottoms"]
SIZE_OPTIONS = [ALL, "XS", "S", "M", "L", "XL", "XXL", "One Size"]
CONDITION_OPTIONS = [ALL] + [c.value for c in Condition]


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def split_tags(value) -> Tuple[str, ...]:
    """Parse tags from a list or a comma-separated string.

    Blank and None entries are dropped; order is preserved.
    """
    if value is None:
        return ()
    parts = value.split(",") if isinstance(value, str) else value
    return tuple(str(tag).strip() for tag in parts if tag is not None and str(tag).strip())


def non_negative_int(value) -> int:
    """Coerce a stored counter to an int >= 0; garbage becomes 0."""
    if isinstance(value, bool):
        return 0
    try:
        number = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(0, number)


@dataclass(frozen=True)
class Listing:
    """A single swappable item.

    Attributes:
        id: Opaque unique identifier
        title: Listing title
        description: Free-text description
        category: Category name, None when uncategorised
        item_type: Sub-type within the category (e.g. "Jacket"), may be empty
        size: Free-form size label, may be empty
        condition: Wear condition (unknown values coerce to fair)
        tags: Free-text labels in display order
        points: Cost of the listing in the points economy
        created_at: Creation timestamp (UTC)
        view_count: Number of detail views
        is_available: False once the item is swapped or withdrawn
        location: Where the item is
        images: Image URLs
        owner_id: Uploader user id
        owner_name: Uploader display name
        updated_at: Last modification timestamp (UTC)
    """
    id: str
    title: str
    description: str = ""
    category: Optional[str] = None
    item_type: str = ""
    size: str = ""
    condition: Condition = Condition.FAIR
    tags: Tuple[str, ...] = ()
    points: int = 0
    created_at: datetime = EPOCH
    view_count: int = 0
    is_available: bool = True
    location: str = ""
    images: Tuple[str, ...] = ()
    owner_id: Optional[str] = None
    owner_name: Optional[str] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        # Frozen, so invariants are enforced through object.__setattr__
        for name in ("title", "description", "item_type", "size", "location"):
            object.__setattr__(self, name, "" if getattr(self, name) is None else str(getattr(self, name)))
        object.__setattr__(self, "condition", Condition.parse(self.condition))
        object.__setattr__(self, "tags", split_tags(self.tags))
        object.__setattr__(self, "images", split_tags(self.images))
        object.__setattr__(self, "points", non_negative_int(self.points))
        object.__setattr__(self, "view_count", non_negative_int(self.view_count))
        object.__setattr__(self, "created_at", _as_utc(self.created_at or EPOCH))
        if self.updated_at is not None:
            object.__setattr__(self, "updated_at", _as_utc(self.updated_at))

    def to_dict(self) -> dict:
        """Convert listing to dictionary for JSON serialization.

        Returns:
            Dictionary with enums as values and datetimes in ISO format
        """
        data = asdict(self)
        data["condition"] = self.condition.value
        data["tags"] = list(self.tags)
        data["images"] = list(self.images)
        data["created_at"] = self.created_at.isoformat()
        data["updated_at"] = self.updated_at.isoformat() if self.updated_at else None
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Listing":
        """Create Listing instance from a dictionary produced by to_dict."""
        data = data.copy()
        for key in ("created_at", "updated_at"):
            if isinstance(data.get(key), str):
                data[key] = datetime.fromisoformat(data[key])
        return cls(**data)


@dataclass(frozen=True)
class Category:
    """Category row as stored by the listing repository."""
    id: str
    name: str


@dataclass(frozen=True)
class FilterConfig:
    """User-chosen constraints and sort order for one catalog query.

    Built fresh from UI state for every query; carries no hidden state.
    """
    search_text: str = ""
    category: str = ALL
    size: str = ALL
    condition: str = ALL
    min_points: Optional[int] = None
    max_points: Optional[int] = None
    sort_key: SortKey = SortKey.NEWEST

    def __post_init__(self):
        object.__setattr__(self, "search_text", "" if self.search_text is None else str(self.search_text))
        object.__setattr__(self, "min_points", parse_points_bound(self.min_points))
        object.__setattr__(self, "max_points", parse_points_bound(self.max_points))
        object.__setattr__(self, "sort_key", SortKey.parse(self.sort_key))
        for name in ("category", "size", "condition"):
            value = getattr(self, name)
            if isinstance(value, Condition):
                value = value.value
            object.__setattr__(self, name, ALL if value is None else value)

    @classmethod
    def from_ui(
        cls,
        search: Optional[str] = None,
        category: Optional[str] = None,
        size: Optional[str] = None,
        condition: Optional[str] = None,
        min_points=None,
        max_points=None,
        sort: Optional[str] = None,
    ) -> "FilterConfig":
        """Build a config from raw UI field values.

        Blank selections mean "All", and point bounds that are blank or
        not whole numbers are treated as absent.
        """
        return cls(
            search_text=search or "",
            category=category or ALL,
            size=size or ALL,
            condition=condition or ALL,
            min_points=parse_points_bound(min_points),
            max_points=parse_points_bound(max_points),
            sort_key=SortKey.parse(sort or SortKey.NEWEST),
        )


def parse_points_bound(value) -> Optional[int]:
    """Parse a free-text points bound.

    Args:
        value: Raw field value (int, numeric string, blank, or garbage)

    Returns:
        Integer bound, or None when the value is blank or unparsable
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    text = str(value).strip()
    if not text:
        return None
    if not _WHOLE_NUMBER.fullmatch(text):
        return None
    return int(text)


@dataclass
class CatalogResult:
    """Filtered, ordered catalog view plus the counts the grid displays."""
    listings: List[Listing] = field(default_factory=list)
    total_count: int = 0
    active_filter_count: int = 0
