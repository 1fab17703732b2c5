#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from .api_client import ApiClient
from .cached_api import CachedApi
from .config import CacheConfig
from .errors import ApiError
from .response_cache import ResponseCache

_LOGGER = logging.getLogger(__name__)

RESOURCES = ("packages", "package", "upstream", "system", "config")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Запрос ресурса AUR Checker через кэш")
    parser.add_argument("resource", choices=RESOURCES)
    parser.add_argument("package_id", nargs="?", help="ID пакета для package/upstream")
    return parser


async def fetch_resource(api: CachedApi, resource: str, package_id: str | None = None):
    """Загружает один ресурс через кэширующий API."""
    if resource == "packages":
        return await api.get_packages()
    if resource == "package":
        return await api.get_package_detail(package_id)
    if resource == "upstream":
        return await api.get_package_upstream(package_id)
    if resource == "system":
        return await api.get_system_info()
    return await api.get_config()


async def main(argv: list[str] | None = None, cfg: CacheConfig | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.resource in ("package", "upstream") and not args.package_id:
        parser.error(f"{args.resource} requires a package id")
    cfg = cfg if cfg is not None else CacheConfig()
    logging.basicConfig(
        level=logging.DEBUG if cfg.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
        stream=sys.stdout,
    )
    _LOGGER.debug("Настройки: api_url=%s default_ttl=%s cleanup_interval=%s single_flight=%s",
                  cfg.api_url, cfg.default_ttl, cfg.cleanup_interval, cfg.single_flight)

    client = ApiClient(cfg.api_url, timeout=cfg.api_timeout)
    async with ResponseCache(cfg) as cache:
        api = CachedApi(client, cache)
        try:
            data = await fetch_resource(api, args.resource, args.package_id)
        except ApiError as exc:
            _LOGGER.error("Запрос %s не удался: %s", args.resource, exc)
            return 1
    print(json.dumps(data, ensure_ascii=False, indent=2))
    return 0


def cli() -> None:
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        _LOGGER.info("Завершение по Ctrl+C")


if __name__ == "__main__":
    cli()
