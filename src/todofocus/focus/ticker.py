"""Periodic tick sources for the countdown timer."""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable

TickCallback = Callable[[], Awaitable[None]]
TickerFactory = Callable[[TickCallback], "Ticker"]

TICK_INTERVAL_SECONDS = 1.0


class Ticker(ABC):
    """Calls a coroutine callback at a fixed interval until cancelled.

    After ``cancel()`` returns, the callback is never invoked again.
    """

    @abstractmethod
    def start(self) -> None:
        """Begin ticking."""

    @abstractmethod
    def cancel(self) -> None:
        """Stop ticking; idempotent."""

    @property
    @abstractmethod
    def running(self) -> bool:
        """Whether ticks are still being delivered."""


class AsyncioTicker(Ticker):
    """Ticker running as a task on the current asyncio event loop."""

    def __init__(self, callback: TickCallback, interval: float = TICK_INTERVAL_SECONDS):
        self.callback = callback
        self.interval = interval
        self._task: asyncio.Task[None] | None = None
        self._stopped = False

    def start(self) -> None:
        """Schedule the tick loop; must be called with a running event loop."""
        if self._task is not None:
            return
        self._stopped = False
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def _run(self) -> None:
        while not self._stopped:
            await asyncio.sleep(self.interval)
            # cancel() may have been called while sleeping
            if self._stopped:
                break
            await self.callback()

    def cancel(self) -> None:
        self._stopped = True
        task, self._task = self._task, None
        if task is None or task.done():
            return
        # A callback cancelling its own ticker lets the loop exit on the flag
        # instead of interrupting the callback mid-await.
        if task is not asyncio.current_task():
            task.cancel()

    @property
    def running(self) -> bool:
        return self._task is not None and not self._stopped


def asyncio_ticker_factory(interval: float = TICK_INTERVAL_SECONDS) -> TickerFactory:
    """Return a factory building ``AsyncioTicker`` objects with ``interval``."""

    def factory(callback: TickCallback) -> Ticker:
        return AsyncioTicker(callback, interval=interval)

    return factory
