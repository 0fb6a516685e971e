"""
Error handling module for thriftX.

Provides the error taxonomy, retry logic and user-facing failure notifications.
"""

from .error_handler import ErrorHandler, RetryConfig
from .errors import (
    GenerationError,
    ListingNotFoundError,
    ListingValidationError,
    RepositoryError,
    ThriftXError,
)

__all__ = [
    'ErrorHandler',
    'RetryConfig',
    'GenerationError',
    'ListingNotFoundError',
    'ListingValidationError',
    'RepositoryError',
    'ThriftXError',
]
