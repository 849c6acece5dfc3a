"""Database layer for movemoro."""

from .engine import get_data_dir, get_db_path, init_db
from .repositories import (
    ActivityRepository,
    HistoryRepository,
    SettingsRepository,
    TimerStateRepository,
)

__all__ = [
    "ActivityRepository",
    "get_data_dir",
    "get_db_path",
    "HistoryRepository",
    "init_db",
    "SettingsRepository",
    "TimerStateRepository",
]
