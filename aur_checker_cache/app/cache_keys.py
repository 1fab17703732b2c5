"""Typed cache keys and the per-category TTL table."""

from __future__ import annotations

import enum
import json
from typing import Any, NamedTuple


class Category(str, enum.Enum):
    """Resource categories cached by the client; the value is the key prefix."""

    PACKAGES = "packages"
    PACKAGE_DETAIL = "package_detail"
    PACKAGE_UPSTREAM = "package_upstream"
    SYSTEM_INFO = "system_info"
    CONFIG = "config"


# Seconds
DEFAULT_TTLS: dict[Category, float] = {
    Category.PACKAGES: 5 * 60,
    Category.PACKAGE_DETAIL: 10 * 60,
    Category.PACKAGE_UPSTREAM: 30 * 60,
    Category.SYSTEM_INFO: 60 * 60,
    Category.CONFIG: 24 * 60 * 60,
}


class CacheKey(NamedTuple):
    category: Category
    discriminator: str = ""

    def __str__(self) -> str:
        if not self.discriminator:
            return self.category.value
        return f"{self.category.value}_{self.discriminator}"


def canonical_params(params: Any) -> str:
    """Serialize call parameters so that equal dicts always give the same key."""
    if params is None:
        params = {}
    return json.dumps(params, sort_keys=True, separators=(",", ":"), default=str)


def category_of(key: str) -> Category | None:
    """Category of a rendered key: the bare prefix or "<prefix>_..."."""
    for category in Category:
        if key == category.value or key.startswith(category.value + "_"):
            return category
    return None


def resolve_category(name: Any) -> Category | None:
    """Returns the Category for a member, its name ("PACKAGES") or prefix ("packages")."""
    if isinstance(name, Category):
        return name
    if not isinstance(name, str):
        return None
    if name in Category.__members__:
        return Category[name]
    try:
        return Category(name)
    except ValueError:
        return None
