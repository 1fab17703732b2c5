from __future__ import annotations

import asyncio
import logging

from .ttl_store import TTLStore

_LOGGER = logging.getLogger(__name__)


class Sweeper:
    """Периодически вызывает TTLStore.cleanup() в фоне."""

    def __init__(self, store: TTLStore, interval: float = 60.0) -> None:
        self._store = store
        self._interval = interval
        self._task: asyncio.Task | None = None
        self._stop_event: asyncio.Event | None = None

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Запускает фоновую задачу в текущем event loop (повторный вызов — no-op)."""
        if self.running:
            return
        self._stop_event = asyncio.Event()
        self._task = asyncio.get_running_loop().create_task(self._run())
        _LOGGER.info("Очистка кэша запущена: interval=%s", self._interval)

    async def stop(self) -> None:
        """Останавливает задачу и дожидается её завершения."""
        task, self._task = self._task, None
        if task is None:
            return
        if self._stop_event is not None:
            self._stop_event.set()
        await task
        _LOGGER.info("Очистка кэша остановлена")

    def sweep_once(self) -> int:
        try:
            removed = self._store.cleanup()
        except Exception as e:
            _LOGGER.warning("Ошибка очистки кэша: %s", e)
            return 0
        _LOGGER.debug("Очистка кэша: удалено %d, осталось %d", removed, self._store.size())
        return removed

    async def _run(self) -> None:
        stop_event = self._stop_event
        while not stop_event.is_set():
            # Sleep but wake up early on stop
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=self._interval)
            except asyncio.TimeoutError:
                self.sweep_once()
