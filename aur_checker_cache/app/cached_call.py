"""Memoization of async fetches against a TTLStore."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable

from .cache_keys import DEFAULT_TTLS, CacheKey
from .ttl_store import MISSING, TTLStore

_LOGGER = logging.getLogger(__name__)

Fetch = Callable[[], Awaitable[Any]]


class SingleFlight:
    """Shares one in-flight fetch between concurrent callers of the same key."""

    def __init__(self) -> None:
        self._calls: dict[str, asyncio.Future] = {}

    def __contains__(self, key: str) -> bool:
        return key in self._calls

    async def do(self, key: str, fetch: Fetch) -> Any:
        pending = self._calls.get(key)
        if pending is not None:
            _LOGGER.debug("Ожидание уже выполняющегося запроса: %s", key)
            # shield: cancelling one waiter must not cancel the shared result
            return await asyncio.shield(pending)

        pending = asyncio.get_running_loop().create_future()
        self._calls[key] = pending
        try:
            result = await fetch()
        except asyncio.CancelledError:
            pending.cancel()
            raise
        except Exception as e:
            pending.set_exception(e)
            # The leader re-raises below; keep asyncio from logging it as unretrieved.
            pending.exception()
            raise
        else:
            pending.set_result(result)
            return result
        finally:
            self._calls.pop(key, None)


async def cached_call(
    store: TTLStore,
    key: CacheKey,
    fetch: Fetch,
    ttl: float | None = None,
    single_flight: SingleFlight | None = None,
) -> Any:
    """Returns the cached value for *key* or awaits *fetch* and caches its result.

    Failures of *fetch* propagate unchanged and are never cached.
    """
    value = store.get(key)
    if value is not MISSING:
        _LOGGER.debug("Кэш hit: %s", key)
        return value

    _LOGGER.debug("Кэш miss: %s", key)
    if ttl is None:
        ttl = DEFAULT_TTLS.get(key.category, store.default_ttl)

    async def _load() -> Any:
        result = await fetch()
        store.set(key, result, ttl)
        return result

    if single_flight is None:
        return await _load()
    return await single_flight.do(str(key), _load)
