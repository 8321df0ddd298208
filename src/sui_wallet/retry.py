"""Bounded exponential-backoff retry for a single upstream call."""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, TypeVar

import backoff

from .constants import PRICE_BASE_DELAY_SECONDS, PRICE_MAX_ATTEMPTS

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RetryingFetcher:
    """Runs a coroutine factory with bounded retries.

    Attempt ``n`` (zero-indexed) that fails with attempts remaining is
    followed by a ``base_delay * 2**n`` second sleep: 2s then 4s with the
    defaults. Every exception is retried the same way and the last one is
    re-raised once ``max_attempts`` calls have failed.

    The sleep is an ``asyncio`` suspension, so concurrent fetches do not wait
    on each other.
    """

    def __init__(
        self,
        *,
        max_attempts: int = PRICE_MAX_ATTEMPTS,
        base_delay: float = PRICE_BASE_DELAY_SECONDS,
    ):
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")
        if base_delay < 0:
            raise ValueError(f"base_delay must be non-negative, got {base_delay}")
        self.max_attempts = max_attempts
        self.base_delay = base_delay

    async def fetch(
        self,
        call: Callable[[], Awaitable[T]],
        *,
        description: str = "upstream call",
    ) -> T:
        """Await ``call()`` until it succeeds or the attempt budget is spent.

        Args:
            call: Zero-argument factory producing a fresh awaitable per attempt
            description: Label used in log messages

        Returns:
            The first successful result

        Raises:
            Exception: The error raised by the final attempt
        """

        def _on_backoff(details: Any) -> None:
            logger.warning(
                "%s failed (attempt %d of %d), retrying in %.1fs: %s",
                description,
                details["tries"],
                self.max_attempts,
                details["wait"],
                details.get("exception"),
            )

        def _on_giveup(details: Any) -> None:
            logger.error(
                "%s failed after %d attempts: %s",
                description,
                details["tries"],
                details.get("exception"),
            )

        @backoff.on_exception(
            backoff.expo,
            Exception,
            max_tries=self.max_attempts,
            factor=self.base_delay,
            jitter=None,
            on_backoff=_on_backoff,
            on_giveup=_on_giveup,
            logger=None,
        )
        async def _attempt() -> T:
            return await call()

        return await _attempt()
