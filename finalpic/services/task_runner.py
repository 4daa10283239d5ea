"""Запуск долгих операций (декодирование, запись файла) вне обработчика событий.

Результат возвращается в поток Tk через опрос `after`, поэтому состояние
сеанса меняется только из главного цикла. Операции не отменяются и не
имеют таймаута.
"""
from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Protocol

from finalpic import config


class Scheduler(Protocol):
    def after(self, ms: int, func: Callable[[], None]) -> Any: ...


class TaskRunner:
    def __init__(self, scheduler: Scheduler, poll_ms: int = config.TASK_POLL_MS) -> None:
        self._scheduler = scheduler
        self._poll_ms = poll_ms
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="finalpic-worker")

    def submit(self, fn: Callable[[], Any], on_done: Callable[[Future], None]) -> Future:
        """Выполняет `fn` в рабочем потоке, `on_done(future)` — в потоке UI."""
        future = self._executor.submit(fn)
        self._scheduler.after(self._poll_ms, lambda: self._poll(future, on_done))
        return future

    def shutdown(self) -> None:
        self._executor.shutdown(wait=False)

    def _poll(self, future: Future, on_done: Callable[[Future], None]) -> None:
        if future.done():
            on_done(future)
            return
        self._scheduler.after(self._poll_ms, lambda: self._poll(future, on_done))
