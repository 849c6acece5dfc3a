"""Hosts for periodic checks and delayed calls."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional, Protocol

logger = logging.getLogger(__name__)


class Cancellable(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Schedules callbacks on a single-threaded host."""

    def call_repeatedly(self, interval: float, callback: Callable[[], None]) -> Cancellable: ...

    def call_later(self, delay: float, callback: Callable[[], None]) -> Cancellable: ...


class _RepeatingCall:
    """Re-arms ``loop.call_later`` after every run until cancelled."""

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop,
        interval: float,
        callback: Callable[[], None],
    ):
        self._loop = loop
        self._interval = interval
        self._callback = callback
        self._cancelled = False
        self._handle: Optional[asyncio.TimerHandle] = loop.call_later(interval, self._run)

    def _run(self) -> None:
        if self._cancelled:
            return
        # Re-arm first so a callback that cancels us also cancels the next run.
        self._handle = self._loop.call_later(self._interval, self._run)
        self._callback()

    def cancel(self) -> None:
        self._cancelled = True
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None


class AsyncioScheduler:
    """Scheduler backed by an asyncio event loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop or asyncio.get_running_loop()

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop

    def call_repeatedly(self, interval: float, callback: Callable[[], None]) -> Cancellable:
        if interval <= 0:
            raise ValueError("interval must be greater than zero")
        return _RepeatingCall(self._loop, interval, callback)

    def call_later(self, delay: float, callback: Callable[[], None]) -> Cancellable:
        return self._loop.call_later(max(0.0, delay), callback)
