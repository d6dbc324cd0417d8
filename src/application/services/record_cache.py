from __future__ import annotations

import logging
import os
import time
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

PROFILE = "profile"
PROJECTS = "projects"
CONTACTS = "contacts"


class RecordCache:
    """Per-process cache of whole collections, invalidated on every write.

    Reads go through ``get_or_load``; use cases call ``invalidate`` after the
    backend acknowledges a write, so the next read reflects server state.
    Entries also expire after ``ttl`` seconds to pick up writes made by other
    processes.
    """

    def __init__(self, ttl: float | None = None) -> None:
        self.ttl = float(os.getenv("RECORD_CACHE_TTL", "30")) if ttl is None else ttl
        self._entries: dict[str, tuple[float, Any]] = {}

    def get_or_load(self, collection: str, loader: Callable[[], Any]) -> Any:
        now = time.monotonic()
        entry = self._entries.get(collection)
        if entry is not None and now - entry[0] < self.ttl:
            return entry[1]
        value = loader()
        self._entries[collection] = (now, value)
        return value

    def invalidate(self, *collections: str) -> None:
        for name in collections:
            if self._entries.pop(name, None) is not None:
                logger.debug("Invalidated cached %s", name)

    def clear(self) -> None:
        self._entries.clear()


_RECORD_CACHE: RecordCache | None = None


def get_record_cache() -> RecordCache:
    global _RECORD_CACHE
    if _RECORD_CACHE is None:
        _RECORD_CACHE = RecordCache()
    return _RECORD_CACHE
