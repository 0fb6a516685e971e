"""Configuration module for thriftX."""

from .app_config import (
    APP_CONFIG,
    AppSettings,
    DatabaseConfig,
    CacheConfig,
    AIConfig,
    RetrySettings,
    get_app_settings,
)

__all__ = [
    'APP_CONFIG',
    'AppSettings',
    'DatabaseConfig',
    'CacheConfig',
    'AIConfig',
    'RetrySettings',
    'get_app_settings',
]
