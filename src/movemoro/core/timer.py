"""Drift-corrected countdown timer.

The timer never decrements a counter per callback. It keeps a wall-clock
anchor, ``start_epoch = now - (duration - remaining)``, and recomputes the
remaining whole seconds from it on every check. A check that is delayed
(throttled host, suspended process) therefore catches up in one step
instead of accumulating error.
"""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass
from typing import Callable, Optional

from .scheduler import Cancellable, Scheduler

logger = logging.getLogger(__name__)

CHECK_INTERVAL_SECONDS = 0.1


@dataclass(frozen=True)
class TimerSnapshot:
    """Immutable timer view."""

    duration_seconds: int
    remaining_seconds: int
    is_running: bool
    is_completed: bool

    @property
    def progress(self) -> float:
        return (self.duration_seconds - self.remaining_seconds) / self.duration_seconds


class CountdownTimer:
    """Countdown over whole seconds with idempotent tick emission."""

    def __init__(
        self,
        duration_seconds: int,
        on_tick: Callable[[int], None],
        on_complete: Callable[[], None],
        *,
        scheduler: Scheduler,
        clock: Callable[[], float] = time.time,
        check_interval: float = CHECK_INTERVAL_SECONDS,
        remaining_seconds: Optional[int] = None,
    ):
        if duration_seconds <= 0:
            raise ValueError("duration_seconds must be greater than zero")

        self.duration = int(duration_seconds)
        self.remaining = self.duration
        if remaining_seconds is not None:
            # Resuming a saved countdown.
            self.remaining = min(self.duration, max(1, int(remaining_seconds)))
        self.is_running = False
        self.is_completed = False
        self.start_epoch: Optional[float] = None

        self._on_tick = on_tick
        self._on_complete = on_complete
        self._scheduler = scheduler
        self._clock = clock
        self._check_interval = check_interval
        self._check_handle: Optional[Cancellable] = None

    def start(self) -> None:
        """Start or resume the countdown. No-op while running or once completed."""
        if self.is_running or self.is_completed:
            return

        self.is_running = True
        self.start_epoch = self._clock() - (self.duration - self.remaining)
        self._check_handle = self._scheduler.call_repeatedly(self._check_interval, self.check)
        logger.debug("Timer started: duration=%ss remaining=%ss", self.duration, self.remaining)
        self.check()

    def pause(self) -> None:
        """Freeze ``remaining`` at its last computed value."""
        if not self.is_running:
            return

        self.is_running = False
        if self._check_handle is not None:
            self._check_handle.cancel()
            self._check_handle = None
        logger.debug("Timer paused: remaining=%ss", self.remaining)

    def check(self) -> None:
        """Recompute ``remaining`` from the anchor; one periodic check."""
        if not self.is_running or self.start_epoch is None:
            return

        elapsed = self._clock() - self.start_epoch
        computed = max(0, self.duration - int(math.floor(elapsed)))
        # A wall clock stepping backwards must not wind the countdown up.
        remaining = min(self.remaining, computed)

        if remaining != self.remaining:
            self.remaining = remaining
            self._on_tick(remaining)

        if self.remaining == 0 and not self.is_completed:
            self._complete()

    def set_duration(self, duration_seconds: int) -> None:
        """Replace duration and remaining; restarts only if it was running."""
        if duration_seconds <= 0:
            raise ValueError("duration_seconds must be greater than zero")

        was_running = self.is_running
        self.pause()
        self.duration = int(duration_seconds)
        self.remaining = self.duration
        self.is_completed = False
        self._on_tick(self.remaining)

        if was_running:
            self.start()

    def extend(self, bonus_seconds: int) -> None:
        """Add bonus time to the live countdown and (re)start it.

        Duration and remaining both grow by ``bonus_seconds`` so elapsed
        progress is kept.
        """
        if bonus_seconds <= 0:
            raise ValueError("bonus_seconds must be greater than zero")

        self.pause()
        self.duration += int(bonus_seconds)
        self.remaining += int(bonus_seconds)
        self.is_completed = False
        self._on_tick(self.remaining)
        self.start()

    def get_remaining(self) -> int:
        return self.remaining

    def get_progress(self) -> float:
        return (self.duration - self.remaining) / self.duration

    @property
    def progress(self) -> float:
        return self.get_progress()

    def snapshot(self) -> TimerSnapshot:
        return TimerSnapshot(
            duration_seconds=self.duration,
            remaining_seconds=self.remaining,
            is_running=self.is_running,
            is_completed=self.is_completed,
        )

    def _complete(self) -> None:
        self.pause()
        self.remaining = 0
        self.is_completed = True
        logger.debug("Timer completed: duration=%ss", self.duration)
        self._on_complete()


def format_clock(seconds: int) -> str:
    """Format seconds as MM:SS."""
    minutes, secs = divmod(max(0, int(seconds)), 60)
    return f"{minutes:02d}:{secs:02d}"
