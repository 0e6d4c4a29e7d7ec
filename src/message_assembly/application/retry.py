"""Retry policy and the bounded retry loop used around offloaded work."""

from __future__ import annotations

import asyncio
import logging
import random
from typing import TYPE_CHECKING, TypeVar

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = logging.getLogger("message_assembly.retry")

T = TypeVar("T")


class ExponentialBackoffPolicy(BaseModel):
    """Retries with increasing delay (exponential backoff).

    ``calculate_delay(k)`` is the wait after failed attempt ``k`` (0-based):
    ``initial_delay_ms * multiplier**k``, capped at ``max_delay_ms``.
    """

    max_attempts: int = Field(default=3, ge=1)
    initial_delay_ms: int = Field(default=200, ge=0)
    multiplier: float = Field(default=2.0, ge=1.0)
    max_delay_ms: int = Field(default=60_000, ge=0)
    jitter: bool = False

    def calculate_delay(self, attempt: int) -> int:
        delay = self.initial_delay_ms * (self.multiplier**attempt)
        return min(int(delay), self.max_delay_ms)


async def retryable_operation(
    operation: Callable[[], Awaitable[T]],
    policy: ExponentialBackoffPolicy,
    *,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """Call *operation* up to ``policy.max_attempts`` times.

    Waits ``policy.calculate_delay(attempt)`` ms between attempts and
    re-raises the last exception once the attempts are used up.
    """
    attempt = 0
    while True:
        try:
            return await operation()
        except Exception as exc:
            if attempt >= policy.max_attempts - 1:
                logger.warning(
                    "Operation failed after %d attempt(s): %r",
                    policy.max_attempts,
                    exc,
                )
                raise
            delay = policy.calculate_delay(attempt)
            if policy.jitter:
                # Simple jitter: +/- 50% of delay
                delay = int(delay * (0.5 + random.random()))  # noqa: S311
            attempt += 1
            logger.info(
                "Operation failed: %r. Retrying in %dms (attempt %d/%d).",
                exc,
                delay,
                attempt + 1,
                policy.max_attempts,
            )
            await sleep(delay / 1000.0)
