"""Best-effort persistence of session events.

The session machine is synchronous; this listener turns its events into
asyncio tasks on the running loop. Writes are serialised through one lock
so the history has a single writer. Failures are logged, never raised back
into the session.
"""

import asyncio
import logging
from pathlib import Path

import aiosqlite

from ..core.events import SessionListener
from ..db.repositories import ActivityRepository, HistoryRepository, TimerStateRepository
from ..models.exercises import Exercise
from ..models.history import CompletionHistory
from ..models.session import SessionSnapshot

logger = logging.getLogger(__name__)


class PersistenceListener(SessionListener):
    """Saves history and activity log entries as the session emits them."""

    def __init__(self, db_path: Path | None = None):
        self.history_repo = HistoryRepository(db_path)
        self.activity_repo = ActivityRepository(db_path)
        self.timer_state_repo = TimerStateRepository(db_path)
        self._lock = asyncio.Lock()
        self._pending: set[asyncio.Task] = set()

    def on_exercise_recorded(self, exercise: Exercise, history: CompletionHistory) -> None:
        snapshot = CompletionHistory(records=list(history.records), limit=history.limit)
        self._submit(self._save_exercise(exercise, snapshot), "save exercise history")

    def on_session_complete(self, session_count: int, work_minutes: int) -> None:
        self._submit(
            self.activity_repo.record_session(session_count, work_minutes),
            "record session",
        )

    def on_extension_granted(
        self, before_seconds: int, after_seconds: int, bonus_seconds: int
    ) -> None:
        self._submit(self.activity_repo.record_extension(bonus_seconds), "record extension")

    async def save_session(self, snapshot: SessionSnapshot) -> None:
        """Save the resume record; used on shutdown."""
        await self._run(self.timer_state_repo.save(snapshot), "save timer state")

    async def flush(self) -> None:
        """Wait for all scheduled writes."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def _save_exercise(self, exercise: Exercise, history: CompletionHistory) -> None:
        await self.history_repo.save(history)
        await self.activity_repo.record_exercise(exercise.id, exercise.category.value)

    def _submit(self, coro, description: str) -> None:
        task = asyncio.get_running_loop().create_task(self._run(coro, description))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _run(self, coro, description: str) -> None:
        async with self._lock:
            try:
                await coro
            except (aiosqlite.Error, OSError) as e:
                logger.error("Failed to %s: %s", description, e)
