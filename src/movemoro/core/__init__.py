"""Timer, exercise selection and session state machine."""

from .events import (
    CHOICES_EXTENSION,
    CHOICES_SNACK,
    LoggingNotifier,
    Notifier,
    NotifyEvent,
    NullNotifier,
    SessionListener,
    TerminalNotifier,
)
from .scheduler import AsyncioScheduler, Scheduler
from .selection import ExerciseSelector, is_floor_exercise, select, select_many
from .session import SessionMachine
from .timer import CountdownTimer, TimerSnapshot, format_clock

__all__ = [
    "AsyncioScheduler",
    "CHOICES_EXTENSION",
    "CHOICES_SNACK",
    "CountdownTimer",
    "ExerciseSelector",
    "format_clock",
    "is_floor_exercise",
    "LoggingNotifier",
    "Notifier",
    "NotifyEvent",
    "NullNotifier",
    "Scheduler",
    "select",
    "select_many",
    "SessionListener",
    "SessionMachine",
    "TerminalNotifier",
    "TimerSnapshot",
]
