"""Resilience – deferred re-attempts.

A :class:`RetryScheduler` resumes a coroutine after a delay without holding
the caller: the consumer hands over the next attempt and goes back to its
source.
"""
from __future__ import annotations

import abc
import asyncio
import logging
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

RetryCallback = Callable[[], Awaitable[None]]


class RetryScheduler(abc.ABC):
    """Port: run *callback* once, *delay* seconds from now."""

    @abc.abstractmethod
    def schedule(self, delay: float, callback: RetryCallback) -> None: ...

    @property
    @abc.abstractmethod
    def pending(self) -> int:
        """Number of scheduled callbacks that have not finished yet."""

    @abc.abstractmethod
    async def close(self) -> None:
        """Drop everything still waiting."""


class AsyncioRetryScheduler(RetryScheduler):
    """Event-loop timers (``loop.call_later``) that spawn a task when due."""

    def __init__(self) -> None:
        self._timers: set[asyncio.TimerHandle] = set()
        self._tasks: set[asyncio.Task[None]] = set()
        self._closed = False

    def schedule(self, delay: float, callback: RetryCallback) -> None:
        if self._closed:
            raise RuntimeError("scheduler is closed")
        loop = asyncio.get_running_loop()
        timer: asyncio.TimerHandle | None = None

        def _fire() -> None:
            self._timers.discard(timer)  # type: ignore[arg-type]
            task = loop.create_task(self._run(callback))
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)

        timer = loop.call_later(max(delay, 0.0), _fire)
        self._timers.add(timer)

    async def _run(self, callback: RetryCallback) -> None:
        try:
            await callback()
        except Exception:
            logger.exception("retry.callback_failed")

    @property
    def pending(self) -> int:
        return len(self._timers) + len(self._tasks)

    async def wait_idle(self, poll_interval: float = 0.01) -> None:
        """Return once no timer or resumed attempt is outstanding."""
        while self.pending:
            if self._tasks:
                await asyncio.gather(*list(self._tasks), return_exceptions=True)
            else:
                await asyncio.sleep(poll_interval)

    async def close(self) -> None:
        self._closed = True
        for timer in list(self._timers):
            timer.cancel()
        dropped = len(self._timers)
        self._timers.clear()
        for task in list(self._tasks):
            task.cancel()
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
        if dropped:
            logger.info("retry.scheduler_closed dropped=%d", dropped)


__all__ = ["AsyncioRetryScheduler", "RetryCallback", "RetryScheduler"]
