import json
import logging
import os
from pathlib import Path

_LOGGER = logging.getLogger(__name__)

DEFAULT_OPTIONS_PATH = Path(os.getenv("AUR_CHECKER_OPTIONS", "/data/options.json"))
DEFAULT_API_URL = "http://localhost:8080/api"


class CacheConfig:

    def __init__(self, options_path: Path = DEFAULT_OPTIONS_PATH):
        self.options_path = options_path
        self._load_config()

    def _load_config(self):
        try:
            with open(self.options_path, encoding="utf-8") as f:
                options = json.load(f)
        except (FileNotFoundError, json.JSONDecodeError):
            options = {}
        if not isinstance(options, dict):
            options = {}

        self.default_ttl = self._number(options.get("default_ttl"), 300.0)
        self.cleanup_interval = self._number(options.get("cleanup_interval"), 60.0)
        self.single_flight = bool(options.get("single_flight", False))
        self.debug = bool(options.get("debug", False))

        # Backend API: файл настроек имеет приоритет над переменной окружения
        self.api_url = str(
            options.get("api_url")
            or os.getenv("AUR_CHECKER_API_URL")
            or DEFAULT_API_URL
        ).rstrip("/")
        self.api_timeout = self._number(options.get("api_timeout"), 30.0)

        overrides = options.get("ttl_overrides") or {}
        self.ttl_overrides: dict[str, float] = {}
        if isinstance(overrides, dict):
            for name, value in overrides.items():
                ttl = self._number(value, None)
                if ttl is None:
                    _LOGGER.warning("Некорректный TTL для %s: %r — игнорируется", name, value)
                    continue
                self.ttl_overrides[str(name)] = ttl

        self._validate_config()

    def _validate_config(self):
        if self.default_ttl <= 0:
            _LOGGER.warning("default_ttl должен быть > 0, используется 300")
            self.default_ttl = 300.0
        if self.cleanup_interval <= 0:
            _LOGGER.warning("cleanup_interval должен быть > 0, используется 60")
            self.cleanup_interval = 60.0
        if self.api_timeout <= 0:
            self.api_timeout = 30.0

    @staticmethod
    def _number(value, default):
        if value is None or isinstance(value, bool):
            return default
        try:
            return float(value)
        except (TypeError, ValueError):
            return default
