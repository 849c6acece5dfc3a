"""Collaborator interfaces the session machine calls out to."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Sequence

import click

from ..models.exercises import Exercise
from ..models.history import CompletionHistory
from ..models.session import Mode

CHOICES_SNACK = "snack"
CHOICES_EXTENSION = "extension"


class NotifyEvent(str, Enum):
    WORK_COMPLETE = "work_complete"
    BREAK_COMPLETE = "break_complete"
    GENERIC = "generic"


class Notifier:
    """Receives notification events. Must not block the timer loop."""

    def notify(self, event: NotifyEvent) -> None:
        raise NotImplementedError


class NullNotifier(Notifier):
    def notify(self, event: NotifyEvent) -> None:
        pass


class LoggingNotifier(Notifier):
    def __init__(self, logger: logging.Logger | None = None):
        self._logger = logger or logging.getLogger("movemoro.notify")

    def notify(self, event: NotifyEvent) -> None:
        self._logger.info("Notification: %s", event.value)


_TERMINAL_MESSAGES = {
    NotifyEvent.WORK_COMPLETE: "Work session complete! Pick an exercise to unlock your break.",
    NotifyEvent.BREAK_COMPLETE: "Break complete! Ready to get back to work?",
}


class TerminalNotifier(Notifier):
    """Rings the terminal bell and prints a short message."""

    def __init__(self, muted: bool = False):
        self.muted = muted

    def notify(self, event: NotifyEvent) -> None:
        if self.muted:
            return
        try:
            click.echo("\a", nl=False)
            message = _TERMINAL_MESSAGES.get(event)
            if message:
                click.echo()
                click.echo(click.style(message, bold=True))
        except OSError as e:
            logging.getLogger(__name__).warning("Terminal notification failed: %s", e)


class SessionListener:
    """Presentation and bookkeeping hooks. All methods default to no-ops."""

    def on_tick(self, remaining_seconds: int) -> None:
        pass

    def on_mode_change(self, mode: Mode, is_long_break: bool) -> None:
        pass

    def on_exercise_choices(self, kind: str, exercises: Sequence[Exercise]) -> None:
        pass

    def on_extension_granted(
        self, before_seconds: int, after_seconds: int, bonus_seconds: int
    ) -> None:
        pass

    def on_exercise_recorded(self, exercise: Exercise, history: CompletionHistory) -> None:
        pass

    def on_session_complete(self, session_count: int, work_minutes: int) -> None:
        pass
