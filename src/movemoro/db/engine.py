"""Database engine setup and initialization."""

import os
from pathlib import Path

import aiosqlite

# Default data directory
DATA_DIR = Path(__file__).parent.parent.parent.parent / "data"

DATA_DIR_ENV = "MOVEMORO_DATA_DIR"


def get_data_dir() -> Path:
    """Get the data directory, honouring the MOVEMORO_DATA_DIR override."""
    override = os.environ.get(DATA_DIR_ENV)
    if override:
        return Path(override).expanduser()
    return DATA_DIR


def get_db_path(data_dir: Path | None = None) -> Path:
    """Get the database file path."""
    if data_dir is None:
        data_dir = get_data_dir()
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / "movemoro.db"


async def init_db(db_path: Path | None = None) -> None:
    """Initialize the database schema."""
    if db_path is None:
        db_path = get_db_path()

    async with aiosqlite.connect(db_path) as db:
        # Single-row settings blob
        await db.execute("""
            CREATE TABLE IF NOT EXISTS settings (
                id INTEGER PRIMARY KEY CHECK (id = 1),
                data TEXT NOT NULL,
                version INTEGER DEFAULT 1,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        # Rolling completion window used for selection
        await db.execute("""
            CREATE TABLE IF NOT EXISTS completion_history (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                exercise_id TEXT NOT NULL,
                completed_at TIMESTAMP NOT NULL
            )
        """)

        # Full activity log (statistics and achievements)
        await db.execute("""
            CREATE TABLE IF NOT EXISTS session_log (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                session_number INTEGER NOT NULL,
                work_minutes INTEGER NOT NULL,
                completed_at TIMESTAMP NOT NULL
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS exercise_log (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                exercise_id TEXT NOT NULL,
                category TEXT DEFAULT 'snack',
                completed_at TIMESTAMP NOT NULL
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS extension_log (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                bonus_seconds INTEGER NOT NULL,
                granted_at TIMESTAMP NOT NULL
            )
        """)

        # Saved session for resume-on-restart
        await db.execute("""
            CREATE TABLE IF NOT EXISTS timer_state (
                id INTEGER PRIMARY KEY CHECK (id = 1),
                data TEXT NOT NULL,
                saved_at TIMESTAMP NOT NULL
            )
        """)

        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_session_log_completed
            ON session_log(completed_at)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_exercise_log_exercise
            ON exercise_log(exercise_id)
        """)

        await db.commit()
