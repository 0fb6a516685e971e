"""Tests for configuration module."""

import os
from pathlib import Path
from thriftx.config import (
    APP_CONFIG,
    AppSettings,
    DatabaseConfig,
    CacheConfig,
    AIConfig,
    RetrySettings,
    get_app_settings,
)


def test_app_config_exists():
    """Test that APP_CONFIG dictionary is properly defined."""
    assert isinstance(APP_CONFIG, dict)
    assert "catalog_file" in APP_CONFIG
    assert "log_level" in APP_CONFIG
    assert "database" in APP_CONFIG
    assert "cache" in APP_CONFIG
    assert "ai" in APP_CONFIG
    assert "retry" in APP_CONFIG


def test_get_app_settings():
    """Test that get_app_settings returns proper AppSettings object."""
    settings = get_app_settings()

    assert isinstance(settings, AppSettings)
    assert settings.catalog_file == APP_CONFIG["catalog_file"]

    assert isinstance(settings.database, DatabaseConfig)
    assert settings.database.url == APP_CONFIG["database"]["url"]

    assert isinstance(settings.cache, CacheConfig)
    assert settings.cache.ttl_seconds == APP_CONFIG["cache"]["ttl_seconds"]

    assert isinstance(settings.ai, AIConfig)
    assert settings.ai.model == APP_CONFIG["ai"]["model"]

    assert isinstance(settings.retry, RetrySettings)
    assert settings.retry.max_retries == APP_CONFIG["retry"]["max_retries"]


def test_app_settings_defaults():
    """Test that AppSettings fills in nested configs."""
    settings = AppSettings()

    assert settings.log_level == "INFO"
    assert settings.database.min_pool_size == 2
    assert settings.database.max_pool_size == 10
    assert settings.cache.enabled is True
    assert settings.cache.ttl_seconds == 300
    assert settings.ai.api_key is None
    assert settings.ai.max_tokens == 500
    assert settings.retry.max_retries == 3
    assert settings.retry.backoff_base_seconds == 0.5


def test_app_settings_with_custom_values():
    """Test that AppSettings can be created with custom values."""
    settings = AppSettings(
        catalog_file="/tmp/catalog.json",
        log_level="DEBUG",
        cache=CacheConfig(enabled=False),
        retry=RetrySettings(max_retries=5, backoff_base_seconds=0.1),
    )

    assert settings.catalog_file == "/tmp/catalog.json"
    assert settings.log_level == "DEBUG"
    assert settings.cache.enabled is False
    assert settings.retry.max_retries == 5
    assert isinstance(settings.database, DatabaseConfig)


def test_default_catalog_file_is_bundled():
    """The sample catalog ships with the package."""
    if "CATALOG_FILE" in os.environ:
        return
    path = Path(APP_CONFIG["catalog_file"])
    assert path.name == "sample_listings.json"
    assert path.exists()
