"""Тесты для модуля config.py"""
import json
from pathlib import Path
from unittest.mock import patch

from aur_checker_cache.app.config import CacheConfig, DEFAULT_API_URL


def _load(options):
    with patch('builtins.open'), patch('aur_checker_cache.app.config.json.load', return_value=options):
        return CacheConfig()


class TestCacheConfig:
    """Тесты для класса CacheConfig"""

    def test_default_config(self):
        config = _load({})

        assert config.default_ttl == 300.0
        assert config.cleanup_interval == 60.0
        assert config.single_flight is False
        assert config.debug is False
        assert config.api_url == DEFAULT_API_URL
        assert config.api_timeout == 30.0
        assert config.ttl_overrides == {}

    def test_load_config_file_not_exists(self, tmp_path):
        config = CacheConfig(options_path=tmp_path / "missing.json")
        assert config.default_ttl == 300.0
        assert config.cleanup_interval == 60.0

    def test_load_config_invalid_json(self, tmp_path):
        path = tmp_path / "options.json"
        path.write_text("{not json", encoding="utf-8")
        config = CacheConfig(options_path=path)
        assert config.api_url == DEFAULT_API_URL

    def test_load_config_from_file(self, tmp_path):
        path = tmp_path / "options.json"
        path.write_text(json.dumps({
            "default_ttl": 120,
            "cleanup_interval": "30",
            "single_flight": True,
            "debug": True,
            "api_url": "http://aur-checker:8080/api/",
            "api_timeout": 10,
            "ttl_overrides": {"PACKAGES": 60},
        }), encoding="utf-8")

        config = CacheConfig(options_path=path)

        assert config.options_path == path
        assert config.default_ttl == 120.0
        assert config.cleanup_interval == 30.0
        assert config.single_flight is True
        assert config.debug is True
        assert config.api_url == "http://aur-checker:8080/api"
        assert config.api_timeout == 10.0
        assert config.ttl_overrides == {"PACKAGES": 60.0}

    def test_api_url_from_env(self, monkeypatch):
        monkeypatch.setenv("AUR_CHECKER_API_URL", "http://env-host/api")
        assert _load({}).api_url == "http://env-host/api"
        assert _load({"api_url": "http://file-host/api"}).api_url == "http://file-host/api"

    def test_invalid_numbers_fall_back(self):
        config = _load({
            "default_ttl": "abc",
            "cleanup_interval": 0,
            "api_timeout": -1,
            "ttl_overrides": {"CONFIG": "never", "SYSTEM_INFO": True, "PACKAGES": 15},
        })
        assert config.default_ttl == 300.0
        assert config.cleanup_interval == 60.0
        assert config.api_timeout == 30.0
        assert config.ttl_overrides == {"PACKAGES": 15.0}

    def test_non_positive_default_ttl(self):
        assert _load({"default_ttl": 0}).default_ttl == 300.0

    def test_non_dict_options(self):
        config = _load(["unexpected"])
        assert config.default_ttl == 300.0

    def test_default_options_path(self):
        with patch('builtins.open', side_effect=FileNotFoundError) as mock_open:
            config = CacheConfig()
        assert isinstance(config.options_path, Path)
        mock_open.assert_called_once()
