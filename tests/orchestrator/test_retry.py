"""Tests for orchestrator retry functionality."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from orchestrator.exceptions import EnhancementError
from orchestrator.retry import (
    NO_RETRY_POLICY,
    RetryPolicy,
    retry_async,
)

FAST_POLICY = RetryPolicy(
    max_attempts=3,
    base_delay_seconds=0.001,
    max_delay_seconds=0.001,
    jitter_seconds=0,
)


class TestRetryPolicy:
    """Tests for RetryPolicy configuration."""

    def test_default_policy_makes_a_single_attempt(self) -> None:
        policy = RetryPolicy()
        assert policy.max_attempts == 1
        assert policy.retryable_exceptions == (EnhancementError,)

    def test_no_retry_policy(self) -> None:
        assert NO_RETRY_POLICY.max_attempts == 1


class TestRetryAsync:
    """Tests for the retry_async function."""

    @pytest.mark.asyncio
    async def test_success_on_first_attempt(self) -> None:
        operation = AsyncMock(return_value="done")

        result = await retry_async(operation, FAST_POLICY, "enhance")

        assert result == "done"
        assert operation.await_count == 1

    @pytest.mark.asyncio
    async def test_success_after_retryable_failures(self) -> None:
        operation = AsyncMock(
            side_effect=[
                EnhancementError("enhance", "timeout"),
                EnhancementError("enhance", "HTTP 503"),
                "done",
            ]
        )

        result = await retry_async(operation, FAST_POLICY, "enhance")

        assert result == "done"
        assert operation.await_count == 3

    @pytest.mark.asyncio
    async def test_last_error_reraised_when_exhausted(self) -> None:
        operation = AsyncMock(side_effect=EnhancementError("enhance", "still down"))

        with pytest.raises(EnhancementError, match="still down"):
            await retry_async(operation, FAST_POLICY, "enhance")

        assert operation.await_count == 3

    @pytest.mark.asyncio
    async def test_non_retryable_error_raised_immediately(self) -> None:
        operation = AsyncMock(side_effect=ValueError("bug"))

        with pytest.raises(ValueError):
            await retry_async(operation, FAST_POLICY, "enhance")

        assert operation.await_count == 1

    @pytest.mark.asyncio
    async def test_no_retry_policy_attempts_once(self) -> None:
        operation = AsyncMock(side_effect=EnhancementError("enhance", "down"))

        with pytest.raises(EnhancementError):
            await retry_async(operation, NO_RETRY_POLICY, "enhance")

        assert operation.await_count == 1
