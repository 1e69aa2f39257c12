"""Опрос хранилища по таймеру вместо push-канала.

На старте и затем каждые `interval` секунд коллекция перечитывается и весь
снимок целиком отдаётся потребителю: без диффов и слияния. Остановка не
прерывает текущий тик: он доходит до конца, после чего цикл завершается.
"""
import asyncio
import inspect
from typing import Any, Awaitable, Callable, Generic, TypeVar

import structlog

logger = structlog.get_logger()

T = TypeVar("T")


class PollingSync(Generic[T]):
    def __init__(
        self,
        name: str,
        read: Callable[[], T],
        on_snapshot: Callable[[T], Awaitable[Any] | Any],
        interval: float,
    ):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.name = name
        self.interval = interval
        self.ticks = 0
        self._read = read
        self._on_snapshot = on_snapshot
        self._stopped = asyncio.Event()
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def tick(self) -> T:
        snapshot = self._read()
        result = self._on_snapshot(snapshot)
        if inspect.isawaitable(result):
            await result
        self.ticks += 1
        logger.debug("poll_tick", view=self.name, tick=self.ticks)
        return snapshot

    async def run(self) -> None:
        while not self._stopped.is_set():
            await self.tick()
            if self._stopped.is_set():
                break
            try:
                await asyncio.wait_for(self._stopped.wait(), timeout=self.interval)
            except asyncio.TimeoutError:
                pass
        logger.info("poll_stopped", view=self.name, ticks=self.ticks)

    def start(self) -> asyncio.Task:
        if self.running:
            return self._task
        self._stopped.clear()
        self._task = asyncio.create_task(self.run(), name=f"poll:{self.name}")
        return self._task

    def halt(self) -> None:
        """Попросить цикл завершиться после текущего тика."""
        self._stopped.set()

    async def stop(self) -> None:
        self.halt()
        if self._task is not None:
            task, self._task = self._task, None
            await task
