"""
FastAPI dependencies wiring routers to repositories and services.
"""

from thriftx.ai import ListingDraftAssistant, TextGenerationService
from thriftx.cache import ListingCache
from thriftx.config import get_app_settings
from thriftx.error_handling import ErrorHandler
from thriftx.repository import FavoritesRepository, PostgresFavoritesRepository, PostgresListingRepository
from thriftx.services import CatalogService

from .db import get_pg_pool, get_redis


def get_error_handler() -> ErrorHandler:
    settings = get_app_settings()
    return ErrorHandler(
        max_retries=settings.retry.max_retries,
        backoff_base_seconds=settings.retry.backoff_base_seconds,
    )


def get_catalog_service() -> CatalogService:
    settings = get_app_settings()
    redis_client = get_redis()
    cache = ListingCache(redis_client, settings.cache.ttl_seconds) if redis_client else None
    return CatalogService(
        repository=PostgresListingRepository(get_pg_pool()),
        cache=cache,
        error_handler=get_error_handler(),
    )


def get_favorites_repository() -> FavoritesRepository:
    return PostgresFavoritesRepository(get_pg_pool())


_text_service = None


def get_text_service() -> TextGenerationService:
    # One client per process
    global _text_service
    if _text_service is None:
        _text_service = TextGenerationService(get_app_settings().ai)
    return _text_service


def get_draft_assistant() -> ListingDraftAssistant:
    return ListingDraftAssistant(get_text_service())
