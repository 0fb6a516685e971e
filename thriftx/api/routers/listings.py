"""
Listing routes: browse, create, view and per-owner listings.
"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Query
from typing import List, Optional

from thriftx.drafts import ListingDraft
from thriftx.error_handling import ErrorHandler, ListingValidationError, RepositoryError
from thriftx.models import (
    CATEGORY_OPTIONS,
    CONDITION_OPTIONS,
    SIZE_OPTIONS,
    SORT_LABELS,
    FilterConfig,
)
from thriftx.services import CatalogService

from ..dependencies import get_catalog_service, get_error_handler
from ..models import (
    BrowseResult,
    CategoryResponse,
    FilterOptions,
    ListingCreate,
    ListingResponse,
    SortOption,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/listings", response_model=BrowseResult)
async def browse_listings(
    search: Optional[str] = Query(None, description="Matched against title, description and tags"),
    category: Optional[str] = Query(None, description="Category name or 'All'"),
    size: Optional[str] = Query(None, description="Size label or 'All'"),
    condition: Optional[str] = Query(None, description="excellent, good, fair or 'All'"),
    min_points: Optional[str] = Query(None, description="Inclusive lower bound; ignored if not a whole number"),
    max_points: Optional[str] = Query(None, description="Inclusive upper bound; ignored if not a whole number"),
    sort: Optional[str] = Query(None, description="newest, oldest, points-high, points-low or most-viewed"),
    service: CatalogService = Depends(get_catalog_service),
    error_handler: ErrorHandler = Depends(get_error_handler),
):
    """
    Browse available listings.

    Builds a fresh FilterConfig from the query string and runs the catalog
    query over the current listing collection.
    """
    config = FilterConfig.from_ui(
        search=search,
        category=category,
        size=size,
        condition=condition,
        min_points=min_points,
        max_points=max_points,
        sort=sort,
    )

    try:
        result = await service.browse(config)
    except RepositoryError as e:
        raise HTTPException(status_code=503, detail=error_handler.describe_failure(e))

    return BrowseResult(
        listings=[ListingResponse.from_listing(listing) for listing in result.listings],
        total_count=result.total_count,
        active_filter_count=result.active_filter_count,
    )


@router.post("/listings", response_model=ListingResponse, status_code=201)
async def create_listing(
    payload: ListingCreate,
    service: CatalogService = Depends(get_catalog_service),
    error_handler: ErrorHandler = Depends(get_error_handler),
):
    """Create a listing from the add-item form."""
    try:
        draft = ListingDraft.from_form(**payload.model_dump())
    except ListingValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))

    try:
        listing = await service.create_listing(draft)
    except RepositoryError as e:
        raise HTTPException(status_code=503, detail=error_handler.describe_failure(e))

    logger.info(f"Listing {listing.id} created")
    return ListingResponse.from_listing(listing)


@router.get("/listings/{listing_id}", response_model=ListingResponse)
async def get_listing(
    listing_id: str,
    service: CatalogService = Depends(get_catalog_service),
    error_handler: ErrorHandler = Depends(get_error_handler),
):
    """Get a single listing for its detail page, counting the view."""
    try:
        listing = await service.view_listing(listing_id)
    except RepositoryError as e:
        raise HTTPException(status_code=503, detail=error_handler.describe_failure(e))

    if listing is None:
        raise HTTPException(status_code=404, detail="Listing not found")
    return ListingResponse.from_listing(listing)


@router.get("/users/{user_id}/listings", response_model=List[ListingResponse])
async def list_user_listings(
    user_id: str,
    service: CatalogService = Depends(get_catalog_service),
    error_handler: ErrorHandler = Depends(get_error_handler),
):
    """Listings owned by one user, including unavailable ones."""
    try:
        listings = await service.listings_by_owner(user_id)
    except RepositoryError as e:
        raise HTTPException(status_code=503, detail=error_handler.describe_failure(e))
    return [ListingResponse.from_listing(listing) for listing in listings]


@router.get("/categories", response_model=List[CategoryResponse])
async def list_categories(
    service: CatalogService = Depends(get_catalog_service),
    error_handler: ErrorHandler = Depends(get_error_handler),
):
    try:
        categories = await service.categories()
    except RepositoryError as e:
        raise HTTPException(status_code=503, detail=error_handler.describe_failure(e))
    return [CategoryResponse(id=c.id, name=c.name) for c in categories]


@router.get("/filters/options", response_model=FilterOptions)
async def filter_options():
    """Choices for the browse filter panel."""
    return FilterOptions(
        categories=CATEGORY_OPTIONS,
        sizes=SIZE_OPTIONS,
        conditions=CONDITION_OPTIONS,
        sort_options=[SortOption(value=key.value, label=label) for key, label in SORT_LABELS.items()],
    )
