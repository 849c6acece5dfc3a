"""Exercise definitions and selection preferences."""

from dataclasses import dataclass, field
from enum import Enum


class Environment(str, Enum):
    """Where an exercise can be performed."""

    OFFICE = "office"
    HOME = "home"


class Category(str, Enum):
    """Role an exercise plays in the session cycle."""

    SNACK = "snack"  # gates entry into a break
    EXTENSION = "extension"  # earns bonus break time


class Difficulty(str, Enum):
    """Exercise difficulty levels."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


ANY_DIFFICULTY = "any"


@dataclass(frozen=True)
class Exercise:
    """Immutable catalog entry."""

    id: str
    name: str
    environment: Environment
    category: Category
    difficulty: Difficulty
    instructions: str = ""
    equipment: frozenset[str] = field(default_factory=frozenset)
    duration_seconds: int = 30
    break_extension_seconds: int = 0  # only meaningful for extension exercises

    @property
    def needs_equipment(self) -> bool:
        return bool(self.equipment)

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "id": self.id,
            "name": self.name,
            "environment": self.environment.value,
            "category": self.category.value,
            "difficulty": self.difficulty.value,
            "instructions": self.instructions,
            "equipment": sorted(self.equipment),
            "duration_seconds": self.duration_seconds,
            "break_extension_seconds": self.break_extension_seconds,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Exercise":
        """Create from dictionary.

        Accepts the camelCase ``duration``/``breakExtension`` keys used by
        older catalog exports as well as the snake_case keys.
        """
        duration = data.get("duration_seconds", data.get("duration", 30))
        extension = data.get(
            "break_extension_seconds", data.get("breakExtension", 0)
        )
        return cls(
            id=str(data["id"]),
            name=data["name"],
            environment=Environment(data["environment"]),
            category=Category(data["category"]),
            difficulty=Difficulty(data["difficulty"]),
            instructions=data.get("instructions", ""),
            equipment=frozenset(data.get("equipment") or []),
            duration_seconds=int(duration),
            break_extension_seconds=int(extension or 0),
        )

    def get_summary(self) -> str:
        """One-line description for listings."""
        parts = [self.name, f"{self.environment.value}/{self.difficulty.value}"]
        if self.category == Category.EXTENSION:
            parts.append(f"+{self.break_extension_seconds // 60} min")
        else:
            parts.append(f"~{self.duration_seconds}s")
        if self.equipment:
            parts.append("needs " + ", ".join(sorted(self.equipment)))
        return " | ".join(parts)


@dataclass(frozen=True)
class SelectionPreferences:
    """User filters applied when suggesting exercises."""

    difficulty: str = ANY_DIFFICULTY
    exclude_floor_exercises: bool = False
    exclude_equipment: bool = False

    def __post_init__(self):
        valid = {ANY_DIFFICULTY} | {d.value for d in Difficulty}
        if self.difficulty not in valid:
            raise ValueError(
                f"difficulty must be one of {sorted(valid)}, got {self.difficulty!r}"
            )
        for name in ("exclude_floor_exercises", "exclude_equipment"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ValueError(f"{name} must be true or false, got {value!r}")

    def to_dict(self) -> dict:
        return {
            "difficulty": self.difficulty,
            "exclude_floor_exercises": self.exclude_floor_exercises,
            "exclude_equipment": self.exclude_equipment,
        }

    @classmethod
    def from_dict(cls, data: dict | None) -> "SelectionPreferences":
        data = data or {}
        return cls(
            difficulty=data.get("difficulty", ANY_DIFFICULTY),
            exclude_floor_exercises=data.get(
                "exclude_floor_exercises", data.get("excludeFloorExercises", False)
            ),
            exclude_equipment=data.get("exclude_equipment", data.get("excludeEquipment", False)),
        )
