"""Exponential backoff around gateway calls.

Only errors flagged ``retryable`` are retried; the flag lives on the
exception classes in ``shared.exceptions``.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, TypeVar

from travel_advisor.infrastructure.logging import StructuredLogger
from travel_advisor.shared.exceptions import GatewayError, RateLimitError

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = 3
    base_delay: float = 0.5
    max_delay: float = 8.0

    def delay_for(self, attempt: int, error: Optional[Exception] = None) -> float:
        """Delay before the attempt after ``attempt`` (1-based)."""
        if isinstance(error, RateLimitError) and error.retry_after is not None:
            return min(error.retry_after, self.max_delay)
        return min(self.base_delay * (2 ** (attempt - 1)), self.max_delay)


def is_retryable(error: Exception) -> bool:
    return isinstance(error, GatewayError) and error.retryable


async def call_with_retry(
    fn: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
    *,
    logger: Optional[StructuredLogger] = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    attempt = 1
    while True:
        try:
            return await fn()
        except GatewayError as e:
            if not is_retryable(e) or attempt >= policy.max_attempts:
                raise
            delay = policy.delay_for(attempt, e)
            if logger is not None:
                logger.retry(attempt, delay, str(e), code=e.code)
            await sleep(delay)
            attempt += 1
