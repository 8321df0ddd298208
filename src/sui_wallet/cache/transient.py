from __future__ import annotations

import threading
import time
from typing import Any, Callable

from cachetools import TTLCache

from ..constants import CACHE_TTL_SECONDS


class TransientCache:
    """In-process cache where every entry expires a fixed TTL after insertion."""

    def __init__(
        self,
        ttl_seconds: float = CACHE_TTL_SECONDS,
        *,
        maxsize: int = 1024,
        timer: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self._cache: TTLCache[str, Any] = TTLCache(
            maxsize=maxsize, ttl=ttl_seconds, timer=timer
        )
        self._lock = threading.Lock()

    def get(self, key: str) -> Any | None:
        with self._lock:
            return self._cache.get(key)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._cache[key] = value

    def __len__(self) -> int:
        with self._lock:
            self._cache.expire()
            return len(self._cache)
