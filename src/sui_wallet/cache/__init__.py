from __future__ import annotations

from .base import DurableCache
from .file_store import FileCacheAdapter
from .tiered import TieredCache
from .transient import TransientCache

__all__ = ["DurableCache", "FileCacheAdapter", "TieredCache", "TransientCache"]
