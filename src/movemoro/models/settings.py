"""Persisted user settings."""

from dataclasses import dataclass, field, replace

from ..errors import ConfigError
from .exercises import SelectionPreferences

SETTINGS_VERSION = 1

DEFAULT_THEME = "professional"


@dataclass(frozen=True)
class Settings:
    """User settings. Durations are in minutes."""

    work_duration: int = 25
    break_duration: int = 5
    long_break_duration: int = 15
    sessions_before_long_break: int = 4
    audio_enabled: bool = True
    theme: str = DEFAULT_THEME
    exercise_preferences: SelectionPreferences = field(default_factory=SelectionPreferences)
    has_seen_welcome: bool = False
    version: int = SETTINGS_VERSION

    def validate(self) -> "Settings":
        """Check durations, session counts and flags.

        Raises:
            ConfigError: If any duration or the session count is not a positive int,
                or a flag is not a bool
        """
        for name in (
            "work_duration",
            "break_duration",
            "long_break_duration",
            "sessions_before_long_break",
        ):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ConfigError(f"{name} must be a positive integer, got {value!r}")
        for name in ("audio_enabled", "has_seen_welcome"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ConfigError(f"{name} must be true or false, got {value!r}")
        return self

    def with_changes(self, **changes) -> "Settings":
        """Return a validated copy with the given fields replaced."""
        return replace(self, **changes).validate()

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "version": self.version,
            "work_duration": self.work_duration,
            "break_duration": self.break_duration,
            "long_break_duration": self.long_break_duration,
            "sessions_before_long_break": self.sessions_before_long_break,
            "audio_enabled": self.audio_enabled,
            "theme": self.theme,
            "exercise_preferences": self.exercise_preferences.to_dict(),
            "has_seen_welcome": self.has_seen_welcome,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Settings":
        """Create from dictionary, filling missing fields from the defaults.

        Raises:
            ConfigError: If a value is invalid
        """
        defaults = cls()
        try:
            preferences = SelectionPreferences.from_dict(data.get("exercise_preferences"))
        except ValueError as e:
            raise ConfigError(str(e)) from e

        settings = cls(
            work_duration=data.get("work_duration", defaults.work_duration),
            break_duration=data.get("break_duration", defaults.break_duration),
            long_break_duration=data.get("long_break_duration", defaults.long_break_duration),
            sessions_before_long_break=data.get(
                "sessions_before_long_break", defaults.sessions_before_long_break
            ),
            audio_enabled=data.get("audio_enabled", defaults.audio_enabled),
            theme=data.get("theme") or defaults.theme,
            exercise_preferences=preferences,
            has_seen_welcome=data.get("has_seen_welcome", defaults.has_seen_welcome),
            version=SETTINGS_VERSION,
        )
        return settings.validate()

    def get_summary(self) -> str:
        """Get a human-readable summary of the settings."""
        prefs = self.exercise_preferences
        lines = [
            f"Work: {self.work_duration} min",
            f"Short break: {self.break_duration} min",
            f"Long break: {self.long_break_duration} min "
            f"(every {self.sessions_before_long_break} sessions)",
            f"Audio: {'on' if self.audio_enabled else 'off'}",
            f"Theme: {self.theme}",
            f"Difficulty: {prefs.difficulty}",
            f"Exclude floor exercises: {'yes' if prefs.exclude_floor_exercises else 'no'}",
            f"Exclude equipment: {'yes' if prefs.exclude_equipment else 'no'}",
        ]
        return "\n".join(lines)
