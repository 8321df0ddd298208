"""File-backed durable cache: one JSON document per key."""

from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
import time
from pathlib import Path
from typing import Any, Callable
from urllib.parse import quote

from .base import DurableCache

logger = logging.getLogger(__name__)


class FileCacheAdapter(DurableCache):
    """Durable cache storing each entry as ``<cache_dir>/<key>.json``.

    Keys may contain ``/`` to form a namespace; each segment becomes a
    directory. Documents have the shape
    ``{"key": ..., "value": ..., "expires_at": <epoch seconds>}``.
    """

    def __init__(self, cache_dir: Path, *, clock: Callable[[], float] = time.time):
        self.cache_dir = Path(cache_dir)
        self._clock = clock

    def path_for(self, key: str) -> Path:
        segments = key.split("/")
        if any(segment in {"", ".", ".."} for segment in segments):
            raise ValueError(f"Invalid cache key: {key!r}")
        safe = [quote(segment, safe="-_.") for segment in segments]
        return self.cache_dir.joinpath(*safe[:-1], f"{safe[-1]}.json")

    async def get(self, key: str) -> Any | None:
        return await asyncio.to_thread(self._read, key)

    async def set(self, key: str, value: Any, expires_at: float) -> None:
        await asyncio.to_thread(self._write, key, value, expires_at)

    def _read(self, key: str) -> Any | None:
        path = self.path_for(key)
        if not path.exists():
            return None

        with path.open("r", encoding="utf-8") as f:
            document = json.load(f)

        try:
            expires_at = float(document["expires_at"])
            value = document["value"]
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Malformed cache document at {path}") from e

        if self._clock() >= expires_at:
            logger.debug("Durable cache entry expired: %s", key)
            return None
        return value

    def _write(self, key: str, value: Any, expires_at: float) -> None:
        path = self.path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        document = {"key": key, "value": value, "expires_at": expires_at}

        # Write to a sibling temp file and rename so readers never see a partial document
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent, prefix=f".{path.stem}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
