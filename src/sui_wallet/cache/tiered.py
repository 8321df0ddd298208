"""Read-through / write-through cache over a transient and a durable tier."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable

from ..constants import CACHE_NAMESPACE, CACHE_TTL_SECONDS
from .base import DurableCache
from .transient import TransientCache

logger = logging.getLogger(__name__)


class TieredCache:
    """Single read/write path hiding the two-tier topology.

    Reads consult the transient tier, then the durable tier (back-filling the
    transient tier on a durable hit). Writes go to the transient tier first and
    then through to the durable tier. Both tiers share one TTL.

    Durable-tier failures never fail the caller: a read failure is a miss and a
    write failure is logged while the transient entry stays in place.
    """

    def __init__(
        self,
        durable: DurableCache,
        *,
        transient: TransientCache | None = None,
        ttl_seconds: int = CACHE_TTL_SECONDS,
        namespace: str = CACHE_NAMESPACE,
        clock: Callable[[], float] = time.time,
    ):
        self.durable = durable
        self.transient = (
            transient if transient is not None else TransientCache(ttl_seconds)
        )
        self.ttl_seconds = ttl_seconds
        self.namespace = namespace.strip("/")
        self._clock = clock

    def durable_key(self, key: str) -> str:
        if not self.namespace:
            return key
        return f"{self.namespace}/{key}"

    async def read(self, key: str) -> Any | None:
        """Return the cached value for ``key`` or None on a miss in both tiers."""
        value = self.transient.get(key)
        if value is not None:
            logger.debug("Transient cache hit: %s", key)
            return value

        try:
            value = await self.durable.get(self.durable_key(key))
        except Exception as e:
            logger.warning("Durable cache read failed for %s, treating as miss: %s", key, e)
            return None

        if value is None:
            logger.debug("Cache miss: %s", key)
            return None

        logger.debug("Durable cache hit: %s", key)
        self.transient.set(key, value)
        return value

    async def write(self, key: str, value: Any) -> None:
        """Store ``value`` in both tiers with the configured TTL."""
        self.transient.set(key, value)

        expires_at = self._clock() + self.ttl_seconds
        try:
            await self.durable.set(self.durable_key(key), value, expires_at)
        except Exception as e:
            logger.error("Durable cache write failed for %s: %s", key, e)
