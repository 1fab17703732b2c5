"""Кэширующая обёртка над ApiClient.

Чтения идут через ResponseCache; мутации после успешного ответа backend
инвалидируют затронутые категории, чтобы следующее чтение ушло в сеть.
"""

from __future__ import annotations

import asyncio
import functools
import logging
from typing import Any, Callable

from .api_client import ApiClient
from .cache_keys import Category, canonical_params
from .response_cache import ResponseCache

_LOGGER = logging.getLogger(__name__)

# Категории, содержимое которых зависит от конкретного пакета
_PACKAGE_CATEGORIES = (Category.PACKAGES, Category.PACKAGE_DETAIL, Category.PACKAGE_UPSTREAM)


class CachedApi:

    def __init__(self, client: ApiClient, cache: ResponseCache) -> None:
        self._client = client
        self._cache = cache

    async def _run(self, func: Callable[..., Any], *args: Any) -> Any:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, functools.partial(func, *args))

    def _fetcher(self, func: Callable[..., Any], *args: Any):
        return lambda: self._run(func, *args)

    def _invalidate(self, *categories: Category) -> None:
        for category in categories:
            self._cache.clear_by_type(category)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    async def get_packages(self, params: dict | None = None) -> Any:
        return await self._cache.call(
            Category.PACKAGES, canonical_params(params), self._fetcher(self._client.get_packages, params)
        )

    async def get_package_detail(self, package_id: int | str) -> Any:
        return await self._cache.call(
            Category.PACKAGE_DETAIL, str(package_id), self._fetcher(self._client.get_package, package_id)
        )

    async def get_package_upstream(self, package_id: int | str) -> Any:
        return await self._cache.call(
            Category.PACKAGE_UPSTREAM, str(package_id), self._fetcher(self._client.get_package_upstream, package_id)
        )

    async def get_system_info(self) -> Any:
        return await self._cache.call(Category.SYSTEM_INFO, "", self._fetcher(self._client.get_system_info))

    async def get_config(self) -> Any:
        return await self._cache.call(Category.CONFIG, "", self._fetcher(self._client.get_config))

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    async def add_package(self, data: dict) -> Any:
        result = await self._run(self._client.add_package, data)
        self._invalidate(Category.PACKAGES)
        return result

    async def update_package(self, package_id: int | str, data: dict) -> Any:
        result = await self._run(self._client.update_package, package_id, data)
        self._invalidate(*_PACKAGE_CATEGORIES)
        return result

    async def delete_package(self, package_id: int | str) -> Any:
        result = await self._run(self._client.delete_package, package_id)
        self._invalidate(*_PACKAGE_CATEGORIES)
        return result

    async def check_upstream_version(self, package_id: int | str) -> Any:
        result = await self._run(self._client.check_upstream_version, package_id)
        self._invalidate(*_PACKAGE_CATEGORIES)
        return result

    async def check_all_upstream_versions(self) -> Any:
        result = await self._run(self._client.check_all_upstream_versions)
        self._invalidate(*_PACKAGE_CATEGORIES)
        return result
