from __future__ import annotations

import logging
import time
from typing import Any

import requests

from .errors import ApiError, handle_request_error

_LOGGER = logging.getLogger(__name__)


class ApiClient:
    """Синхронный клиент backend API AUR Checker.

    Возвращает уже декодированный JSON; любые ошибки запросов превращаются
    в ApiError. Кэш вызывает методы через run_in_executor.
    """

    def __init__(self, base_url: str, timeout: float = 30.0) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _request(self, method: str, endpoint: str, error_context: str, **kwargs: Any) -> Any:
        """Общая функция запросов к API с телеметрией (latency, статус)."""
        url = f"{self.base_url}{endpoint}"
        start = time.monotonic()
        try:
            response = requests.request(method, url, timeout=self.timeout, **kwargs)
            elapsed_ms = int((time.monotonic() - start) * 1000)
            _LOGGER.debug("API %s %s status=%s elapsed_ms=%d", method, endpoint, response.status_code, elapsed_ms)
            response.raise_for_status()
            if not response.content:
                return None
            return response.json()
        except (requests.RequestException, ValueError) as e:
            handle_request_error(e, error_context, _LOGGER)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def get_packages(self, params: dict | None = None) -> Any:
        return self._request("GET", "/packages", "получить список пакетов", params=params or None)

    def get_package(self, package_id: int | str) -> Any:
        return self._request("GET", f"/packages/{package_id}", f"получить пакет {package_id}")

    def get_package_upstream(self, package_id: int | str) -> Any:
        return self._request("GET", f"/packages/{package_id}/upstream", f"получить upstream пакета {package_id}")

    def get_system_info(self) -> Any:
        return self._request("GET", "/system/info", "получить информацию о системе")

    def get_config(self) -> Any:
        return self._request("GET", "/config", "получить конфигурацию")

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def add_package(self, data: dict) -> Any:
        if not data.get("name"):
            raise ValueError("package name must not be empty")
        if not data.get("upstreamUrl"):
            raise ValueError("upstream URL must not be empty")
        payload = {
            "name": data["name"],
            "upstreamUrl": data["upstreamUrl"],
            "versionExtractKey": data.get("versionExtractKey") or "",
            "upstreamChecker": data.get("upstreamChecker") or "",
            "checkTestVersion": data.get("checkTestVersion") or 0,
        }
        return self._request("POST", "/packages", "добавить пакет", json=payload)

    def update_package(self, package_id: int | str, data: dict) -> Any:
        payload = {
            "name": data.get("name"),
            "upstreamUrl": data.get("upstreamUrl"),
            "versionExtractKey": data.get("versionExtractKey"),
            "upstreamChecker": data.get("upstreamChecker") or "",
            "checkTestVersion": data.get("checkTestVersion") or 0,
        }
        return self._request("PUT", f"/packages/{package_id}", f"обновить пакет {package_id}", json=payload)

    def delete_package(self, package_id: int | str) -> Any:
        return self._request("DELETE", f"/packages/{package_id}", f"удалить пакет {package_id}")

    def check_upstream_version(self, package_id: int | str) -> Any:
        return self._request("POST", f"/upstream/check/{package_id}", f"проверить upstream пакета {package_id}")

    def check_all_upstream_versions(self) -> Any:
        return self._request("POST", "/upstream/check/all", "проверить upstream всех пакетов")


__all__ = ["ApiClient", "ApiError"]
