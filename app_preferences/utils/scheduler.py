"""Coalescing scheduler for write-heavy components."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Protocol, Union

logger = logging.getLogger(__name__)

WriteCallback = Callable[[], Union[Awaitable[object], object]]


class SchedulerState(str, Enum):
    IDLE = "idle"
    SCHEDULED = "scheduled"


class WriteScheduler(Protocol):
    """Debounce primitive a session uses to batch its writes."""

    @property
    def pending(self) -> bool: ...

    def request_write(self) -> None: ...

    def cancel(self) -> None: ...

    async def wait(self) -> None: ...


SchedulerFactory = Callable[[Callable[[], object], float], WriteScheduler]


class CoalescingWriteScheduler:
    """Runs ``write`` once per quiet period, however often it is requested.

    The first :meth:`request_write` arms a timer for ``interval`` seconds on the
    running event loop. Further requests while the timer is armed are ignored;
    they neither reset nor stack it. When the timer fires the scheduler goes
    back to idle before the write starts, so a request made during the write
    arms a new cycle. A coroutine function is awaited, a plain callable runs in
    a worker thread.
    """

    def __init__(self, write: WriteCallback, interval: float) -> None:
        self._write = write
        self.interval = interval
        self._state = SchedulerState.IDLE
        self._handle: asyncio.TimerHandle | None = None
        self._task: asyncio.Task[None] | None = None

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def pending(self) -> bool:
        return self._state is SchedulerState.SCHEDULED

    def request_write(self) -> None:
        if self._state is SchedulerState.SCHEDULED:
            return
        loop = asyncio.get_running_loop()
        self._state = SchedulerState.SCHEDULED
        self._handle = loop.call_later(self.interval, self._fire, loop)

    def cancel(self) -> None:
        """Drop a scheduled write that has not fired yet."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._state = SchedulerState.IDLE

    async def wait(self) -> None:
        """Wait for the most recently started write, if any."""
        if self._task is not None:
            await asyncio.shield(self._task)

    def _fire(self, loop: asyncio.AbstractEventLoop) -> None:
        self._handle = None
        self._state = SchedulerState.IDLE
        self._task = loop.create_task(self._run())

    async def _run(self) -> None:
        try:
            if inspect.iscoroutinefunction(self._write):
                await self._write()
            else:
                result = await asyncio.to_thread(self._write)
                if inspect.isawaitable(result):
                    await result
        except Exception:
            logger.exception("Scheduled write failed")
