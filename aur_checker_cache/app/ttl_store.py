"""In-memory TTL store for already-decoded API responses.

The store is process-local and unsynchronised: every operation runs to
completion without awaiting, so on a single event loop no two mutations can
interleave.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Union

from .cache_keys import CacheKey, Category, category_of

_LOGGER = logging.getLogger(__name__)

MISSING = object()  # Sentinel for cache misses (a cached None/[] is still a hit)

Key = Union[str, CacheKey]


@dataclass
class CacheEntry:
    value: Any
    expires_at: float
    category: Category | None = None


class TTLStore:
    """Mapping of string keys to values with an absolute expiry instant.

    Expired entries are never returned: they are dropped lazily on read and
    in bulk by :meth:`cleanup`.
    """

    def __init__(self, default_ttl: float = 300.0, clock: Callable[[], float] = time.monotonic) -> None:
        self._default_ttl = default_ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    @property
    def default_ttl(self) -> float:
        return self._default_ttl

    def set(self, key: Key, value: Any, ttl: float | None = None) -> None:
        """Store *value*, replacing both value and expiry of an existing entry."""
        ttl = self._default_ttl if ttl is None else ttl
        category = key.category if isinstance(key, CacheKey) else category_of(key)
        self._entries[str(key)] = CacheEntry(value, self._clock() + ttl, category)

    def get(self, key: Key, default: Any = MISSING) -> Any:
        """Return cached value, or *default* (MISSING) on miss or expiry."""
        skey = str(key)
        entry = self._entries.get(skey)
        if entry is None:
            return default
        if entry.expires_at <= self._clock():
            del self._entries[skey]
            return default
        return entry.value

    def has(self, key: Key) -> bool:
        return self.get(key) is not MISSING

    def delete(self, key: Key) -> None:
        self._entries.pop(str(key), None)

    def clear(self) -> None:
        self._entries.clear()

    def keys(self) -> list[str]:
        """All tracked keys, including expired ones not yet swept."""
        return list(self._entries)

    def size(self) -> int:
        return len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def cleanup(self) -> int:
        """Remove every expired entry; returns the number removed."""
        now = self._clock()
        return self._remove(lambda k, e: e.expires_at <= now)

    def invalidate_prefix(self, prefix: str) -> int:
        return self._remove(lambda k, e: k.startswith(prefix))

    def invalidate_category(self, category: Category) -> int:
        return self._remove(lambda k, e: e.category is category)

    def _remove(self, predicate: Callable[[str, CacheEntry], bool]) -> int:
        doomed = [k for k, e in self._entries.items() if predicate(k, e)]
        for k in doomed:
            del self._entries[k]
        if doomed:
            _LOGGER.debug("Удалено записей кэша: %d", len(doomed))
        return len(doomed)
