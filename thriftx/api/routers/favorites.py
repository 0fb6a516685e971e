"""
Favorites routes.
"""

import logging
from fastapi import APIRouter, Depends, HTTPException
from typing import List

from thriftx.error_handling import ErrorHandler, ListingNotFoundError, RepositoryError
from thriftx.repository import FavoritesRepository

from ..dependencies import get_error_handler, get_favorites_repository
from ..models import ListingResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/users/{user_id}/favorites", response_model=List[ListingResponse])
async def list_favorites(
    user_id: str,
    favorites: FavoritesRepository = Depends(get_favorites_repository),
    error_handler: ErrorHandler = Depends(get_error_handler),
):
    try:
        listings = await favorites.list_favorites(user_id)
    except RepositoryError as e:
        raise HTTPException(status_code=503, detail=error_handler.describe_failure(e))
    return [ListingResponse.from_listing(listing) for listing in listings]


@router.post("/users/{user_id}/favorites/{listing_id}")
async def add_favorite(
    user_id: str,
    listing_id: str,
    favorites: FavoritesRepository = Depends(get_favorites_repository),
    error_handler: ErrorHandler = Depends(get_error_handler),
):
    """Add a listing to a user's favorites; adding twice is a no-op."""
    try:
        added = await favorites.add_favorite(user_id, listing_id)
    except ListingNotFoundError:
        raise HTTPException(status_code=404, detail="Listing not found")
    except RepositoryError as e:
        raise HTTPException(status_code=503, detail=error_handler.describe_failure(e))

    if added:
        logger.info(f"User {user_id} favorited {listing_id}")
    return {"listing_id": listing_id, "favorite": True, "changed": added}


@router.delete("/users/{user_id}/favorites/{listing_id}")
async def remove_favorite(
    user_id: str,
    listing_id: str,
    favorites: FavoritesRepository = Depends(get_favorites_repository),
    error_handler: ErrorHandler = Depends(get_error_handler),
):
    try:
        removed = await favorites.remove_favorite(user_id, listing_id)
    except RepositoryError as e:
        raise HTTPException(status_code=503, detail=error_handler.describe_failure(e))
    return {"listing_id": listing_id, "favorite": False, "changed": removed}
