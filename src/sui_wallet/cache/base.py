from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class DurableCache(ABC):
    """Abstract base class for cache stores that survive a process restart.

    Implementations must raise on backing-store failures rather than
    returning ``None``; the caller decides whether a failure counts as a miss.
    """

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """Return the stored value, or None if absent or expired."""
        ...

    @abstractmethod
    async def set(self, key: str, value: Any, expires_at: float) -> None:
        """Store ``value`` under ``key`` until the epoch time ``expires_at``."""
        ...
