"""Exercise selection.

Selection is a pipeline of filter stages over a candidate pool:

    kind -> preferences (difficulty, floor, equipment) -> recency/display -> random pick

When a stage empties the pool, the policy table below decides which
constraint gives way. Difficulty is sacrificed first, then the
recency/display exclusion. Floor and equipment exclusions are never
relaxed.
"""

from __future__ import annotations

import logging
import random
import re
from typing import Iterable, Optional, Sequence

from ..models.exercises import (
    ANY_DIFFICULTY,
    Category,
    Environment,
    Exercise,
    SelectionPreferences,
)
from ..models.history import RECENT_WINDOW, CompletionHistory

logger = logging.getLogger(__name__)

# Names that indicate an exercise is done lying on the floor.
FLOOR_EXERCISE_KEYWORDS = (
    "burpees",
    "mountain climbers",
    "push-ups",
    "plank",
    "bicycle crunches",
    "glute bridges",
    "superman",
    "side plank",
    "inchworms",
    "dead bug",
    "leg raises",
    "russian twists",
    "yoga",
    "pilates",
    "stretching",
)

_FLOOR_INSTRUCTION_PATTERN = re.compile(r"\b(lie|lying|floor)\b", re.IGNORECASE)

# Stage name -> relaxed when the pool would otherwise be empty.
RELAXATION_POLICY: dict[str, bool] = {
    "difficulty": True,  # first preference sacrificed
    "recency": True,  # then recent/displayed exclusion
    "floor": False,
    "equipment": False,
}


def is_floor_exercise(exercise: Exercise) -> bool:
    """Whether the exercise involves lying down or floor use."""
    name = exercise.name.lower()
    if any(keyword in name for keyword in FLOOR_EXERCISE_KEYWORDS):
        return True
    return bool(_FLOOR_INSTRUCTION_PATTERN.search(exercise.instructions))


def filter_by_kind(
    catalog: Iterable[Exercise],
    category: Category,
    environment: Optional[Environment] = None,
) -> list[Exercise]:
    """Stage 1: restrict the catalog to a category (and environment)."""
    return [
        e
        for e in catalog
        if e.category == category and (environment is None or e.environment == environment)
    ]


def filter_by_difficulty(pool: Sequence[Exercise], difficulty: str) -> list[Exercise]:
    if difficulty == ANY_DIFFICULTY:
        return list(pool)
    return [e for e in pool if e.difficulty.value == difficulty]


def filter_floor(pool: Sequence[Exercise], exclude: bool) -> list[Exercise]:
    if not exclude:
        return list(pool)
    return [e for e in pool if not is_floor_exercise(e)]


def filter_equipment(pool: Sequence[Exercise], exclude: bool) -> list[Exercise]:
    if not exclude:
        return list(pool)
    return [e for e in pool if not e.needs_equipment]


def apply_preferences(
    pool: Sequence[Exercise],
    preferences: Optional[SelectionPreferences],
) -> list[Exercise]:
    """Stages 2-3: preference filters with difficulty relaxation.

    Returns an empty list only when the hard exclusions (floor, equipment)
    leave nothing.
    """
    if preferences is None:
        return list(pool)

    hard = filter_equipment(
        filter_floor(pool, preferences.exclude_floor_exercises),
        preferences.exclude_equipment,
    )
    filtered = filter_by_difficulty(hard, preferences.difficulty)
    if filtered or not RELAXATION_POLICY["difficulty"]:
        return filtered

    if hard:
        logger.debug(
            "No %s exercises left after filtering; relaxing difficulty",
            preferences.difficulty,
        )
    return hard


def exclude_ids(
    pool: Sequence[Exercise],
    excluded: Iterable[str],
) -> list[Exercise]:
    """Stage 4: drop excluded ids, falling back to the full pool if that empties it."""
    excluded = set(excluded)
    available = [e for e in pool if e.id not in excluded]
    if available or not RELAXATION_POLICY["recency"]:
        return available
    return list(pool)


def select(
    pool: Sequence[Exercise],
    preferences: Optional[SelectionPreferences],
    recent_ids: Iterable[str] = (),
    excluded_ids: Iterable[str] = (),
    rng: Optional[random.Random] = None,
) -> Optional[Exercise]:
    """Pick one exercise from ``pool``; ``None`` if nothing survives the hard filters."""
    rng = rng or random.Random()
    eligible = apply_preferences(pool, preferences)
    available = exclude_ids(eligible, set(recent_ids) | set(excluded_ids))
    if not available:
        return None
    return rng.choice(available)


def select_many(
    pool: Sequence[Exercise],
    preferences: Optional[SelectionPreferences],
    count: int,
    recent_ids: Iterable[str] = (),
    rng: Optional[random.Random] = None,
) -> list[Exercise]:
    """Shuffle the eligible pool and return the first ``count`` distinct entries."""
    if count <= 0:
        return []
    rng = rng or random.Random()
    eligible = apply_preferences(pool, preferences)
    available = exclude_ids(eligible, recent_ids)
    shuffled = list({e.id: e for e in available}.values())
    rng.shuffle(shuffled)
    return shuffled[:count]


class ExerciseSelector:
    """Suggests snack pairs and extension candidates from a catalog."""

    def __init__(
        self,
        catalog: Sequence[Exercise],
        history: Optional[CompletionHistory] = None,
        preferences: Optional[SelectionPreferences] = None,
        rng: Optional[random.Random] = None,
    ):
        self.catalog: tuple[Exercise, ...] = tuple(catalog)
        self.history = history if history is not None else CompletionHistory()
        self.preferences = preferences or SelectionPreferences()
        self.current_pair: list[Exercise] = []
        self._rng = rng or random.Random()

    def set_preferences(self, preferences: SelectionPreferences) -> None:
        self.preferences = preferences

    def get_exercise(self, exercise_id: str) -> Optional[Exercise]:
        for exercise in self.catalog:
            if exercise.id == exercise_id:
                return exercise
        return None

    def select_snack_pair(self) -> list[Exercise]:
        """One office and one home snack; environments with no candidates are omitted."""
        recent = self.history.recent_ids(RECENT_WINDOW)
        displayed = {e.id for e in self.current_pair}

        pair = []
        for environment in (Environment.OFFICE, Environment.HOME):
            pool = filter_by_kind(self.catalog, Category.SNACK, environment)
            picked = select(pool, self.preferences, recent, displayed, self._rng)
            if picked is not None:
                pair.append(picked)

        if not pair:
            logger.warning("No snack exercises available")
        self.current_pair = pair
        return list(pair)

    def select_extension_candidates(self, count: int = 3) -> list[Exercise]:
        pool = filter_by_kind(self.catalog, Category.EXTENSION)
        return select_many(
            pool,
            self.preferences,
            count,
            recent_ids=self.history.recent_ids(RECENT_WINDOW),
            rng=self._rng,
        )

    def record_completion(self, exercise: Exercise) -> None:
        self.history.append(exercise.id)
        logger.info("Exercise completed: %s (%s)", exercise.name, exercise.id)
