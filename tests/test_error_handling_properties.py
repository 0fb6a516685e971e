"""
Property-based tests for error handling.

These tests verify universal properties that should hold for all retry and
notification operations across randomly generated inputs.
"""

import pytest
import asyncio
from unittest.mock import AsyncMock, patch
from hypothesis import given, settings, strategies as st
from thriftx.error_handling import (
    ErrorHandler,
    GenerationError,
    ListingValidationError,
    RepositoryError,
    RetryConfig,
)


# Strategy for generating retry configuration values
retry_counts = st.integers(min_value=1, max_value=10)
base_delays = st.floats(min_value=0.01, max_value=5.0)
multiplier_values = st.floats(min_value=1.1, max_value=3.0)
attempt_numbers = st.integers(min_value=0, max_value=9)


@given(
    base=base_delays,
    multiplier=multiplier_values,
    attempt=attempt_numbers
)
@settings(max_examples=100)
def test_backoff_delay_escalation(base, multiplier, attempt):
    """
    Each retry waits longer than the one before it, growing by the
    configured multiplier.
    """
    config = RetryConfig(backoff_base_seconds=base, backoff_multiplier=multiplier)

    current = config.get_backoff_delay(attempt)
    following = config.get_backoff_delay(attempt + 1)

    assert current == pytest.approx(base * (multiplier ** attempt))
    assert following > current
    assert following / current == pytest.approx(multiplier)


@given(max_retries=retry_counts)
@settings(max_examples=20, deadline=None)
def test_retryable_errors_are_retried_up_to_max(max_retries):
    """A persistently failing retryable call is attempted exactly max_retries times."""
    handler = ErrorHandler(max_retries=max_retries, backoff_base_seconds=0.01)
    operation = AsyncMock(side_effect=RepositoryError("connection reset"))

    with patch("thriftx.error_handling.error_handler.asyncio.sleep", new=AsyncMock()) as sleep:
        with pytest.raises(RepositoryError, match="connection reset"):
            asyncio.run(handler.retry_with_backoff(operation))

    assert operation.await_count == max_retries
    assert sleep.await_count == max_retries - 1


@given(failures=st.integers(min_value=0, max_value=4))
@settings(max_examples=20, deadline=None)
def test_eventual_success_returns_result(failures):
    handler = ErrorHandler(max_retries=5, backoff_base_seconds=0.01)
    operation = AsyncMock(side_effect=[RepositoryError("timeout")] * failures + [["listing"]])

    with patch("thriftx.error_handling.error_handler.asyncio.sleep", new=AsyncMock()):
        result = asyncio.run(handler.retry_with_backoff(operation))

    assert result == ["listing"]
    assert operation.await_count == failures + 1


@pytest.mark.asyncio
async def test_non_retryable_error_is_raised_immediately():
    handler = ErrorHandler(max_retries=3)
    operation = AsyncMock(side_effect=RepositoryError("bad query", retryable=False))

    with patch("thriftx.error_handling.error_handler.asyncio.sleep", new=AsyncMock()) as sleep:
        with pytest.raises(RepositoryError):
            await handler.retry_with_backoff(operation)

    assert operation.await_count == 1
    sleep.assert_not_awaited()


@pytest.mark.asyncio
async def test_other_exceptions_propagate_without_retry():
    handler = ErrorHandler(max_retries=3)
    operation = AsyncMock(side_effect=KeyError("boom"))

    with pytest.raises(KeyError):
        await handler.retry_with_backoff(operation)

    assert operation.await_count == 1


@pytest.mark.asyncio
async def test_arguments_are_forwarded():
    handler = ErrorHandler()
    operation = AsyncMock(return_value=True)

    assert await handler.retry_with_backoff(operation, "item-1", force=True) is True
    operation.assert_awaited_once_with("item-1", force=True)


@pytest.mark.parametrize("max_retries", [0, -2])
def test_max_retries_is_at_least_one(max_retries):
    assert ErrorHandler(max_retries=max_retries).config.max_retries == 1


@pytest.mark.parametrize("error,description,retryable", [
    (RepositoryError("pool closed"), "Failed to load items. Please try again.", True),
    (RepositoryError("bad file", retryable=False), "Failed to load items. Please try again.", False),
    (ListingValidationError("Title is required"), "Title is required", False),
    (GenerationError("AI API key not configured"), "Failed to generate content: AI API key not configured", True),
])
def test_describe_failure(error, description, retryable):
    notification = ErrorHandler().describe_failure(error)

    assert notification["title"] == "Error"
    assert notification["variant"] == "destructive"
    assert notification["description"] == description
    assert notification["retryable"] is retryable
    assert "timestamp" in notification
