"""
Normalization of raw listing records into the canonical Listing shape.

Storage rows use snake_case (created_at, view_count, category_id) while
client payloads use camelCase (createdAt, viewCount, isSwapAvailable) and
free-text condition labels such as "Like New". Everything is mapped here so
the catalog query engine only ever sees Listing.
"""

from datetime import datetime, timezone
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from thriftx.error_handling import ListingValidationError
from thriftx.models import EPOCH, Condition, Listing, non_negative_int, split_tags


CONDITION_LABELS = {
    "excellent": Condition.EXCELLENT,
    "like new": Condition.EXCELLENT,
    "like-new": Condition.EXCELLENT,
    "new": Condition.EXCELLENT,
    "mint": Condition.EXCELLENT,
    "good": Condition.GOOD,
    "fair": Condition.FAIR,
    "well-loved": Condition.FAIR,
    "well loved": Condition.FAIR,
    "worn": Condition.FAIR,
}


def parse_condition(label: Any) -> Condition:
    """Map a stored or UI condition label to a Condition (unknown -> fair)."""
    if isinstance(label, Condition):
        return label
    if not isinstance(label, str):
        return Condition.FAIR
    return CONDITION_LABELS.get(label.strip().lower(), Condition.FAIR)


def parse_tags(value: Any) -> Tuple[str, ...]:
    """Parse tags from a list or a comma-separated string (blanks dropped)."""
    return split_tags(value)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 string or datetime into an aware UTC datetime.

    Returns:
        Parsed datetime, or None if the value is missing or malformed
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _first(raw: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in raw and raw[key] is not None:
            return raw[key]
    return default


def _resolve_category(raw: Mapping[str, Any], category_names: Optional[Mapping[str, str]]) -> Optional[str]:
    name = _first(raw, "category_name", "category")
    if isinstance(name, Mapping):
        name = name.get("name")
    if isinstance(name, str) and name.strip():
        return name.strip()

    category_id = _first(raw, "category_id", "categoryId")
    if category_id is not None and category_names:
        return category_names.get(str(category_id))
    return None


def _resolve_owner(raw: Mapping[str, Any]) -> Tuple[Optional[str], Optional[str]]:
    owner_id = _first(raw, "user_id", "userId", "owner_id")
    owner_name = _first(raw, "owner_name", "full_name")

    uploader = raw.get("uploader")
    if isinstance(uploader, Mapping):
        owner_id = owner_id or uploader.get("id")
        owner_name = owner_name or uploader.get("name")

    profiles = raw.get("profiles")
    if isinstance(profiles, Mapping) and not owner_name:
        owner_name = profiles.get("full_name")

    return (
        str(owner_id) if owner_id is not None else None,
        owner_name or None,
    )


def normalize_listing(
    raw: Mapping[str, Any],
    category_names: Optional[Mapping[str, str]] = None
) -> Listing:
    """Convert a raw storage row or client payload into a Listing.

    Args:
        raw: Mapping in snake_case (storage) or camelCase (client) shape
        category_names: Optional {category_id: name} table for rows that
            only carry an opaque category id

    Returns:
        Canonical Listing

    Raises:
        ListingValidationError: If the record has no id
    """
    listing_id = raw.get("id")
    if listing_id is None or str(listing_id).strip() == "":
        raise ListingValidationError("Listing record is missing an id")

    owner_id, owner_name = _resolve_owner(raw)
    is_available = _first(raw, "is_available", "isAvailable", "isSwapAvailable", default=True)

    return Listing(
        id=str(listing_id),
        title=str(raw.get("title") or ""),
        description=str(raw.get("description") or ""),
        category=_resolve_category(raw, category_names),
        item_type=str(_first(raw, "item_type", "itemType", "type", default="")),
        size=str(raw.get("size") or ""),
        condition=parse_condition(raw.get("condition")),
        tags=parse_tags(raw.get("tags")),
        points=non_negative_int(raw.get("points")),
        created_at=parse_timestamp(_first(raw, "created_at", "createdAt")) or EPOCH,
        view_count=non_negative_int(_first(raw, "view_count", "viewCount", default=0)),
        is_available=bool(is_available),
        location=str(raw.get("location") or ""),
        images=parse_tags(raw.get("images")),
        owner_id=owner_id,
        owner_name=owner_name,
        updated_at=parse_timestamp(_first(raw, "updated_at", "updatedAt")),
    )


def normalize_listings(
    rows: Iterable[Mapping[str, Any]],
    category_names: Optional[Mapping[str, str]] = None
) -> List[Listing]:
    """Normalize a batch of rows, preserving their order."""
    return [normalize_listing(row, category_names) for row in rows]
