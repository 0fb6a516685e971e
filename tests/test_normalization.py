"""Tests for listing normalization and drafts."""

import pytest
from hypothesis import given, settings, strategies as st
from datetime import datetime, timezone
from thriftx.drafts import ListingDraft
from thriftx.error_handling import ListingValidationError
from thriftx.models import EPOCH, Condition
from thriftx.normalization import (
    normalize_listing,
    normalize_listings,
    parse_condition,
    parse_tags,
    parse_timestamp,
)


CLIENT_RECORD = {
    "id": "1",
    "title": "Vintage Denim Jacket",
    "description": "Classic blue denim jacket from the 90s",
    "category": "Outerwear",
    "type": "Jacket",
    "size": "M",
    "condition": "excellent",
    "tags": ["vintage", "denim", "classic"],
    "points": 45,
    "location": "New York, NY",
    "uploader": {"id": "user1", "name": "Sarah Johnson"},
    "createdAt": "2024-01-15T10:30:00Z",
    "isSwapAvailable": True,
    "viewCount": 127,
}

STORAGE_ROW = {
    "id": "abc",
    "title": "Mom Jeans",
    "description": None,
    "category_id": "cat-7",
    "category_name": None,
    "size": "S",
    "condition": "Well-Loved",
    "tags": "denim, jeans, ,90s",
    "points": "30",
    "user_id": "user7",
    "created_at": datetime(2024, 1, 9, 12, 0),
    "updated_at": "2024-01-10T08:00:00+02:00",
    "is_available": False,
    "view_count": -4,
    "profiles": {"full_name": "Jo Park"},
}


@pytest.mark.parametrize("label,expected", [
    ("excellent", Condition.EXCELLENT),
    ("Like New", Condition.EXCELLENT),
    ("like-new", Condition.EXCELLENT),
    ("mint", Condition.EXCELLENT),
    ("Good", Condition.GOOD),
    ("fair", Condition.FAIR),
    ("Well-Loved", Condition.FAIR),
    ("worn", Condition.FAIR),
    ("gently used", Condition.FAIR),
    (None, Condition.FAIR),
    (Condition.GOOD, Condition.GOOD),
])
def test_parse_condition_labels(label, expected):
    assert parse_condition(label) == expected


@given(label=st.one_of(st.none(), st.text(max_size=20), st.integers()))
@settings(max_examples=100)
def test_parse_condition_never_raises(label):
    assert parse_condition(label) in set(Condition)


def test_parse_tags_accepts_string_and_list():
    assert parse_tags("vintage, denim,, classic ") == ("vintage", "denim", "classic")
    assert parse_tags(["a", " ", None, "b"]) == ("a", "b")
    assert parse_tags(None) == ()
    assert parse_tags("") == ()


def test_parse_timestamp_variants():
    utc = datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)

    assert parse_timestamp("2024-01-15T10:30:00Z") == utc
    assert parse_timestamp("2024-01-15T12:30:00+02:00") == utc
    assert parse_timestamp(datetime(2024, 1, 15, 10, 30)) == utc
    assert parse_timestamp("yesterday") is None
    assert parse_timestamp("") is None
    assert parse_timestamp(12345) is None


def test_normalize_client_record():
    listing = normalize_listing(CLIENT_RECORD)

    assert listing.id == "1"
    assert listing.category == "Outerwear"
    assert listing.item_type == "Jacket"
    assert listing.condition is Condition.EXCELLENT
    assert listing.tags == ("vintage", "denim", "classic")
    assert listing.points == 45
    assert listing.view_count == 127
    assert listing.is_available is True
    assert listing.owner_id == "user1"
    assert listing.owner_name == "Sarah Johnson"
    assert listing.created_at == datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)


def test_normalize_storage_row():
    listing = normalize_listing(STORAGE_ROW, category_names={"cat-7": "Bottoms"})

    assert listing.description == ""
    assert listing.category == "Bottoms"
    assert listing.item_type == ""
    assert listing.condition is Condition.FAIR
    assert listing.tags == ("denim", "jeans", "90s")
    assert listing.points == 30
    assert listing.view_count == 0
    assert listing.is_available is False
    assert listing.owner_id == "user7"
    assert listing.owner_name == "Jo Park"
    assert listing.created_at == datetime(2024, 1, 9, 12, 0, tzinfo=timezone.utc)
    assert listing.updated_at == datetime(2024, 1, 10, 6, 0, tzinfo=timezone.utc)


def test_unknown_category_id_is_uncategorised():
    assert normalize_listing(STORAGE_ROW).category is None
    assert normalize_listing(STORAGE_ROW, category_names={"other": "Tops"}).category is None


def test_nested_category_object():
    listing = normalize_listing({"id": "1", "title": "T", "category": {"id": "c", "name": "Tops"}})

    assert listing.category == "Tops"


def test_missing_timestamp_defaults_to_epoch():
    listing = normalize_listing({"id": "1", "title": "T", "createdAt": "not a date"})

    assert listing.created_at == EPOCH


def test_minimal_record_gets_defaults():
    listing = normalize_listing({"id": 7})

    assert listing.id == "7"
    assert listing.title == ""
    assert listing.category is None
    assert listing.condition is Condition.FAIR
    assert listing.points == 0
    assert listing.is_available is True


@pytest.mark.parametrize("record", [{}, {"id": None}, {"id": "  "}])
def test_missing_id_raises(record):
    with pytest.raises(ListingValidationError):
        normalize_listing(record)


def test_normalize_listings_preserves_order():
    rows = [{"id": str(i), "title": f"Item {i}"} for i in range(5)]

    assert [l.id for l in normalize_listings(rows)] == ["0", "1", "2", "3", "4"]


def test_draft_from_form_maps_labels():
    draft = ListingDraft.from_form(
        title="  Silk Scarf ",
        description="Floral",
        category="Accessories",
        type="Scarf",
        size="One Size",
        condition="Like New",
        tags="silk, floral",
        points="20",
    )

    assert draft.title == "Silk Scarf"
    assert draft.item_type == "Scarf"
    assert draft.condition is Condition.EXCELLENT
    assert draft.tags == ("silk", "floral")
    assert draft.points == 20


def test_draft_defaults_blank_points_to_zero():
    assert ListingDraft.from_form(title="Hat", points="").points == 0


@pytest.mark.parametrize("fields,message", [
    ({"title": ""}, "Title is required"),
    ({"title": "   "}, "Title is required"),
    ({"title": "Hat", "points": -5}, "Points cannot be negative"),
    ({"title": "Hat", "points": "lots"}, "Points must be a whole number"),
])
def test_draft_validation_errors(fields, message):
    with pytest.raises(ListingValidationError, match=message):
        ListingDraft.from_form(**fields)


def test_validation_error_is_value_error():
    with pytest.raises(ValueError):
        ListingDraft(title="")
