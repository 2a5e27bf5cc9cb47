"""Retry policy for backend calls made by the orchestrator.

The enhancement client itself never retries; whether a failed enhancement is
attempted again is decided here. The default policy makes a single attempt.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TypeVar

from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
    wait_random,
)

from orchestrator.exceptions import EnhancementError

logger = logging.getLogger("justiceally.orchestrator.retry")

T = TypeVar("T")


@dataclass(slots=True)
class RetryPolicy:
    """Configuration for retry behavior.

    Attributes:
        max_attempts: Maximum number of attempts (1 = no retries).
        base_delay_seconds: Base delay for exponential backoff.
        max_delay_seconds: Maximum delay cap.
        jitter_seconds: Upper bound of random delay added to each wait.
        retryable_exceptions: Exception types that trigger retry.
    """

    max_attempts: int = 1
    base_delay_seconds: float = 1.0
    max_delay_seconds: float = 10.0
    jitter_seconds: float = 0.5
    retryable_exceptions: tuple[type[Exception], ...] = field(
        default_factory=lambda: (EnhancementError,)
    )

    def retrying(self) -> AsyncRetrying:
        return AsyncRetrying(
            stop=stop_after_attempt(max(1, self.max_attempts)),
            wait=(
                wait_exponential(multiplier=self.base_delay_seconds, max=self.max_delay_seconds)
                + wait_random(0, self.jitter_seconds)
            ),
            retry=retry_if_exception_type(self.retryable_exceptions),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )


async def retry_async(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
    operation_name: str = "operation",
) -> T:
    """Execute an async operation under a retry policy.

    Args:
        operation: The async callable to execute.
        policy: The retry policy to apply.
        operation_name: Name for logging purposes.

    Returns:
        The operation's result.

    Raises:
        Exception: The last exception once attempts are exhausted, or any
            non-retryable exception immediately.
    """
    async for attempt in policy.retrying():
        with attempt:
            result = await operation()
        number = attempt.retry_state.attempt_number
        if number > 1:
            logger.info(f"{operation_name} succeeded on attempt {number}/{policy.max_attempts}")
    return result


NO_RETRY_POLICY = RetryPolicy(max_attempts=1)
