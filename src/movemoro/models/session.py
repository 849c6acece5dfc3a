"""Session state and snapshot models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from .exercises import Exercise


class Mode(str, Enum):
    """Session modes."""

    WORK = "work"
    BREAK = "break"
    LONG_BREAK = "long_break"

    @property
    def is_break(self) -> bool:
        return self is not Mode.WORK

    @property
    def display_name(self) -> str:
        return {
            Mode.WORK: "Work Session",
            Mode.BREAK: "Short Break",
            Mode.LONG_BREAK: "Long Break",
        }[self]


@dataclass
class SessionState:
    """Mutable state owned by the session machine."""

    mode: Mode = Mode.WORK
    session_count: int = 0
    last_break_mode: Mode = Mode.BREAK
    break_extension_offered: bool = False
    extension_panel_active: bool = False
    awaiting_exercise: bool = False

    def next_break_is_long(self, sessions_before_long_break: int) -> bool:
        """Whether confirming a snack now leads into a long break."""
        return (
            self.session_count > 0
            and (self.session_count + 1) % sessions_before_long_break == 0
        )

    def session_in_cycle(self, sessions_before_long_break: int) -> int:
        """1-based position of the current session within the long-break cycle."""
        return self.session_count % sessions_before_long_break + 1

    def get_counter_display(self, sessions_before_long_break: int) -> str:
        return (
            f"Session {self.session_in_cycle(sessions_before_long_break)} "
            f"of {sessions_before_long_break}"
        )


@dataclass(frozen=True)
class SessionSnapshot:
    """Immutable view of the session exposed to presentation layers."""

    mode: Mode
    session_count: int
    last_break_mode: Mode
    duration_seconds: int
    remaining_seconds: int
    is_running: bool
    awaiting_exercise: bool = False
    extension_panel_active: bool = False
    break_extension_offered: bool = False
    choices: tuple[Exercise, ...] = ()
    extension_candidates: tuple[Exercise, ...] = ()
    saved_at: datetime | None = field(default=None, compare=False)

    @property
    def progress(self) -> float:
        if self.duration_seconds <= 0:
            return 0.0
        return (self.duration_seconds - self.remaining_seconds) / self.duration_seconds

    def to_dict(self) -> dict:
        """Convert to dictionary for storage and the web API."""
        return {
            "mode": self.mode.value,
            "session_count": self.session_count,
            "last_break_mode": self.last_break_mode.value,
            "duration_seconds": self.duration_seconds,
            "remaining_seconds": self.remaining_seconds,
            "progress": round(self.progress, 4),
            "is_running": self.is_running,
            "awaiting_exercise": self.awaiting_exercise,
            "extension_panel_active": self.extension_panel_active,
            "break_extension_offered": self.break_extension_offered,
            "choices": [exercise.to_dict() for exercise in self.choices],
            "extension_candidates": [
                exercise.to_dict() for exercise in self.extension_candidates
            ],
            "saved_at": self.saved_at.isoformat() if self.saved_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SessionSnapshot":
        """Create from dictionary.

        Exercise lists are not restored; a restored session draws fresh
        choices from the catalog.
        """
        saved_at = None
        if data.get("saved_at"):
            saved_at = datetime.fromisoformat(data["saved_at"])

        return cls(
            mode=Mode(data["mode"]),
            session_count=int(data.get("session_count", 0)),
            last_break_mode=Mode(data.get("last_break_mode", Mode.BREAK.value)),
            duration_seconds=int(data["duration_seconds"]),
            remaining_seconds=int(data["remaining_seconds"]),
            is_running=bool(data.get("is_running", False)),
            awaiting_exercise=bool(data.get("awaiting_exercise", False)),
            extension_panel_active=bool(data.get("extension_panel_active", False)),
            break_extension_offered=bool(data.get("break_extension_offered", False)),
            saved_at=saved_at,
        )
