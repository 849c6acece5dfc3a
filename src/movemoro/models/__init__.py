"""Data models for movemoro."""

from .achievements import ACHIEVEMENTS, Achievement, ActivityStats
from .exercises import (
    ANY_DIFFICULTY,
    Category,
    Difficulty,
    Environment,
    Exercise,
    SelectionPreferences,
)
from .history import CompletionHistory, CompletionRecord
from .session import Mode, SessionSnapshot, SessionState
from .settings import Settings

__all__ = [
    "ACHIEVEMENTS",
    "ANY_DIFFICULTY",
    "Achievement",
    "ActivityStats",
    "Category",
    "CompletionHistory",
    "CompletionRecord",
    "Difficulty",
    "Environment",
    "Exercise",
    "Mode",
    "SelectionPreferences",
    "SessionSnapshot",
    "SessionState",
    "Settings",
]
