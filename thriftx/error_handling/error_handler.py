"""
Error handler with retry logic for thriftX collaborators.

Implements exponential backoff for repository calls and turns failures into
transient user notifications.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict

from .errors import GenerationError, ListingValidationError, RepositoryError


logger = logging.getLogger(__name__)


@dataclass
class RetryConfig:
    """
    Configuration for retry behavior with exponential backoff.

    Attributes:
        max_retries: Maximum number of attempts
        backoff_base_seconds: Delay before the first retry
        backoff_multiplier: Growth factor of the delay on each retry
    """
    max_retries: int = 3
    backoff_base_seconds: float = 0.5
    backoff_multiplier: float = 2.0

    def get_backoff_delay(self, attempt: int) -> float:
        """
        Calculate backoff delay before retry attempt.

        delay = backoff_base_seconds * (backoff_multiplier ^ attempt)

        Args:
            attempt: The retry attempt number (0-indexed)

        Returns:
            Delay in seconds before the retry attempt
        """
        return self.backoff_base_seconds * (self.backoff_multiplier ** attempt)


class ErrorHandler:
    """
    Retries failed collaborator calls and describes failures for the UI.

    Only RepositoryError with retryable=True is retried; anything else is
    re-raised immediately.

    Attributes:
        config: Retry configuration
    """

    def __init__(
        self,
        max_retries: int = 3,
        backoff_base_seconds: float = 0.5
    ):
        """
        Initialize error handler with retry configuration.

        Args:
            max_retries: Maximum number of attempts (default: 3)
            backoff_base_seconds: Delay before the first retry (default: 0.5)
        """
        self.config = RetryConfig(
            max_retries=max(1, max_retries),
            backoff_base_seconds=backoff_base_seconds
        )

    async def retry_with_backoff(
        self,
        operation: Callable,
        *args,
        **kwargs
    ) -> Any:
        """
        Execute operation with exponential backoff retry logic.

        Args:
            operation: Async callable to execute
            *args: Positional arguments for the operation
            **kwargs: Keyword arguments for the operation

        Returns:
            Result from successful operation execution

        Raises:
            Exception: The last exception encountered if all retries are exhausted,
                or the first non-retryable one
        """
        name = getattr(operation, "__name__", repr(operation))
        last_exception = None

        for attempt in range(self.config.max_retries):
            try:
                logger.debug(f"Attempt {attempt + 1}/{self.config.max_retries} for operation {name}")
                result = await operation(*args, **kwargs)
                if attempt > 0:
                    logger.info(f"Operation {name} succeeded on attempt {attempt + 1}")
                return result

            except RepositoryError as e:
                last_exception = e
                self._log_error(name, attempt + 1, self.config.max_retries, e)

                if not e.retryable:
                    raise

                if attempt == self.config.max_retries - 1:
                    logger.error(
                        f"Operation {name} failed after {self.config.max_retries} attempts. "
                        f"Final error: {e}"
                    )
                    break

                backoff_delay = self.config.get_backoff_delay(attempt)
                logger.info(f"Waiting {backoff_delay:.1f}s before retry...")
                await asyncio.sleep(backoff_delay)

        raise last_exception

    def describe_failure(self, error: Exception) -> Dict[str, Any]:
        """
        Build a transient notification for a failed collaborator call.

        Args:
            error: The exception raised by a repository or the AI service

        Returns:
            Dictionary with title, description, variant, retryable and timestamp
        """
        if isinstance(error, ListingValidationError):
            description = str(error)
            retryable = False
        elif isinstance(error, RepositoryError):
            description = "Failed to load items. Please try again."
            retryable = error.retryable
        elif isinstance(error, GenerationError):
            description = f"Failed to generate content: {error}"
            retryable = True
        else:
            description = str(error) or "An unexpected error occurred"
            retryable = True

        notification = {
            'title': 'Error',
            'description': description,
            'variant': 'destructive',
            'retryable': retryable,
            'timestamp': datetime.now().isoformat(),
        }
        logger.warning(f"{type(error).__name__}: {error}")
        return notification

    def _log_error(
        self,
        operation_name: str,
        attempt: int,
        max_attempts: int,
        error: Exception
    ) -> None:
        logger.error(
            f"Operation failed: {operation_name} | "
            f"Attempt: {attempt}/{max_attempts} | "
            f"Error: {type(error).__name__}: {str(error)}"
        )
