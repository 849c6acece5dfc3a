"""Services layered over the session core."""

from .bootstrap import SessionContext, close_session, open_session
from .persistence import PersistenceListener
from .stats import StatsService, build_stats, newly_unlocked

__all__ = [
    "build_stats",
    "close_session",
    "newly_unlocked",
    "open_session",
    "PersistenceListener",
    "SessionContext",
    "StatsService",
]
