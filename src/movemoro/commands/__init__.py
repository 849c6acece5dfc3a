"""CLI commands for movemoro."""

from .exercises import exercises
from .history import history
from .init import init
from .run import run
from .serve import serve
from .settings import settings
from .stats import stats

__all__ = [
    "exercises",
    "history",
    "init",
    "run",
    "serve",
    "settings",
    "stats",
]
