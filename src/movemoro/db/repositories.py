"""Data access layer for movemoro."""

import json
import logging
from datetime import datetime, timedelta
from pathlib import Path

import aiosqlite

from ..errors import ConfigError
from ..models.history import HISTORY_LIMIT, CompletionHistory, CompletionRecord
from ..models.session import SessionSnapshot
from ..models.settings import SETTINGS_VERSION, Settings
from .engine import get_db_path

logger = logging.getLogger(__name__)

TIMER_STATE_MAX_AGE = timedelta(minutes=5)


class SettingsRepository:
    """Repository for user settings."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def get(self) -> Settings:
        """Load settings; missing or invalid settings fall back to defaults."""
        try:
            async with aiosqlite.connect(self.db_path) as db:
                cursor = await db.execute("SELECT data, version FROM settings WHERE id = 1")
                row = await cursor.fetchone()
        except aiosqlite.Error as e:
            logger.error("Error loading settings: %s", e)
            return Settings()

        if row is None:
            return Settings()

        try:
            data = json.loads(row[0])
            if row[1] and row[1] > SETTINGS_VERSION:
                logger.warning(
                    "Settings version %s is newer than supported version %s",
                    row[1],
                    SETTINGS_VERSION,
                )
            return Settings.from_dict(data)
        except (json.JSONDecodeError, ConfigError) as e:
            logger.warning("Invalid stored settings, using defaults: %s", e)
            return Settings()

    async def save(self, settings: Settings) -> None:
        """Persist settings (validated)."""
        settings.validate()
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO settings (id, data, version, updated_at)
                VALUES (1, ?, ?, CURRENT_TIMESTAMP)
                ON CONFLICT(id) DO UPDATE SET
                    data = excluded.data,
                    version = excluded.version,
                    updated_at = CURRENT_TIMESTAMP
                """,
                (json.dumps(settings.to_dict()), settings.version),
            )
            await db.commit()

    async def reset(self) -> Settings:
        """Restore default settings."""
        settings = Settings()
        await self.save(settings)
        return settings


class HistoryRepository:
    """Repository for the rolling completion history."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def load(self, limit: int = HISTORY_LIMIT) -> CompletionHistory:
        """Load the most recent completions, oldest first."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                """
                SELECT exercise_id, completed_at FROM completion_history
                ORDER BY id DESC LIMIT ?
                """,
                (limit,),
            )
            rows = await cursor.fetchall()

        records = [
            CompletionRecord(
                exercise_id=row["exercise_id"],
                timestamp=datetime.fromisoformat(row["completed_at"]),
            )
            for row in reversed(rows)
        ]
        return CompletionHistory(records=records, limit=limit)

    async def save(self, history: CompletionHistory) -> None:
        """Replace the stored window with ``history``."""
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute("DELETE FROM completion_history")
            await db.executemany(
                "INSERT INTO completion_history (exercise_id, completed_at) VALUES (?, ?)",
                [(r.exercise_id, r.timestamp.isoformat()) for r in history],
            )
            await db.commit()

    async def clear(self) -> None:
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute("DELETE FROM completion_history")
            await db.commit()


class ActivityRepository:
    """Repository for the append-only activity log."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def record_session(
        self,
        session_number: int,
        work_minutes: int,
        completed_at: datetime | None = None,
    ) -> int:
        """Log a completed work/break cycle."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO session_log (session_number, work_minutes, completed_at)
                VALUES (?, ?, ?)
                """,
                (session_number, work_minutes, (completed_at or datetime.now()).isoformat()),
            )
            await db.commit()
            return cursor.lastrowid

    async def record_exercise(
        self,
        exercise_id: str,
        category: str,
        completed_at: datetime | None = None,
    ) -> int:
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO exercise_log (exercise_id, category, completed_at)
                VALUES (?, ?, ?)
                """,
                (exercise_id, category, (completed_at or datetime.now()).isoformat()),
            )
            await db.commit()
            return cursor.lastrowid

    async def record_extension(
        self,
        bonus_seconds: int,
        granted_at: datetime | None = None,
    ) -> int:
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "INSERT INTO extension_log (bonus_seconds, granted_at) VALUES (?, ?)",
                (bonus_seconds, (granted_at or datetime.now()).isoformat()),
            )
            await db.commit()
            return cursor.lastrowid

    async def get_sessions(self) -> list[tuple[datetime, int]]:
        """All completed sessions as (completed_at, work_minutes), oldest first."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT completed_at, work_minutes FROM session_log ORDER BY completed_at"
            )
            rows = await cursor.fetchall()
        return [(datetime.fromisoformat(row[0]), row[1]) for row in rows]

    async def get_exercise_counts(self) -> dict[str, int]:
        """Completion count per exercise id."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT exercise_id, COUNT(*) FROM exercise_log GROUP BY exercise_id"
            )
            rows = await cursor.fetchall()
        return {row[0]: row[1] for row in rows}

    async def count_extensions(self) -> int:
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute("SELECT COUNT(*) FROM extension_log")
            row = await cursor.fetchone()
        return row[0] if row else 0


class TimerStateRepository:
    """Repository for the saved session used to resume after a restart."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def save(self, snapshot: SessionSnapshot, saved_at: datetime | None = None) -> None:
        saved_at = saved_at or datetime.now()
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO timer_state (id, data, saved_at) VALUES (1, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    data = excluded.data,
                    saved_at = excluded.saved_at
                """,
                (json.dumps(snapshot.to_dict()), saved_at.isoformat()),
            )
            await db.commit()

    async def load_fresh(
        self,
        now: datetime | None = None,
        max_age: timedelta = TIMER_STATE_MAX_AGE,
    ) -> SessionSnapshot | None:
        """Return the saved session if it is younger than ``max_age``."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute("SELECT data, saved_at FROM timer_state WHERE id = 1")
            row = await cursor.fetchone()

        if row is None:
            return None

        saved_at = datetime.fromisoformat(row[1])
        if (now or datetime.now()) - saved_at >= max_age:
            return None

        try:
            data = json.loads(row[0])
            data["saved_at"] = row[1]
            return SessionSnapshot.from_dict(data)
        except (json.JSONDecodeError, KeyError, ValueError) as e:
            logger.warning("Discarding unreadable timer state: %s", e)
            return None

    async def clear(self) -> None:
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute("DELETE FROM timer_state")
            await db.commit()
