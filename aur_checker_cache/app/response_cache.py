from __future__ import annotations

import logging
import time
from typing import Any, Callable

from .cache_keys import DEFAULT_TTLS, CacheKey, Category, resolve_category
from .cached_call import Fetch, SingleFlight, cached_call
from .config import CacheConfig
from .sweeper import Sweeper
from .ttl_store import TTLStore

_LOGGER = logging.getLogger(__name__)


class ResponseCache:
    """Владеет TTLStore и его фоновой очисткой; точка инвалидации для мутаций."""

    def __init__(
        self,
        config: CacheConfig | None = None,
        store: TTLStore | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        default_ttl = config.default_ttl if config else 300.0
        interval = config.cleanup_interval if config else 60.0
        self.store = store if store is not None else TTLStore(default_ttl=default_ttl, clock=clock)
        self.sweeper = Sweeper(self.store, interval=interval)
        self.single_flight = SingleFlight() if config and config.single_flight else None
        self._ttls = dict(DEFAULT_TTLS)
        for name, ttl in (config.ttl_overrides if config else {}).items():
            category = resolve_category(name)
            if category is None:
                _LOGGER.warning("TTL для неизвестной категории кэша: %s", name)
                continue
            self._ttls[category] = ttl

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self) -> None:
        self.sweeper.start()

    async def stop(self) -> None:
        await self.sweeper.stop()

    async def __aenter__(self) -> "ResponseCache":
        self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.stop()
        return False

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def ttl_for(self, category: Category) -> float:
        return self._ttls[category]

    async def call(self, category: Category, discriminator: str, fetch: Fetch, ttl: float | None = None) -> Any:
        key = CacheKey(category, discriminator)
        return await cached_call(
            self.store,
            key,
            fetch,
            ttl=self.ttl_for(category) if ttl is None else ttl,
            single_flight=self.single_flight,
        )

    # ------------------------------------------------------------------
    # Invalidation
    # ------------------------------------------------------------------
    def invalidate(self, prefix: str) -> int:
        """Удаляет все ключи, начинающиеся с *prefix* (только для известных префиксов)."""
        if not any(prefix == c.value for c in Category):
            _LOGGER.warning("Инвалидация по незарегистрированному префиксу: %s", prefix)
            return 0
        removed = self.store.invalidate_prefix(prefix)
        _LOGGER.info("Инвалидация префикса %s: удалено %d", prefix, removed)
        return removed

    def clear_all(self) -> None:
        self.store.clear()
        _LOGGER.info("Кэш полностью очищен")

    def clear_by_type(self, name: Any) -> int:
        """Удаляет все записи категории; для неизвестного имени только предупреждение."""
        category = resolve_category(name)
        if category is None:
            _LOGGER.warning("Unknown cache type: %s", name)
            return 0
        removed = self.store.invalidate_category(category)
        _LOGGER.info("Инвалидация категории %s: удалено %d", category.name, removed)
        return removed
