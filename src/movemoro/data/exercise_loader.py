"""Exercise catalog loader from JSON."""

import json
import logging
from pathlib import Path

from ..errors import CatalogLoadError
from ..models.exercises import Category, Environment, Exercise

logger = logging.getLogger(__name__)


def get_exercises_json_path() -> Path:
    """Get the path to the bundled exercise catalog."""
    return Path(__file__).parent / "exercises.json"


def load_catalog(path: Path | None = None) -> list[Exercise]:
    """Load the exercise catalog.

    The file holds either a list of exercises or an object with an
    ``exercises`` list. Invalid entries are skipped with a warning; entries
    whose id was already seen are dropped.

    Args:
        path: Catalog file. Uses the bundled catalog if not provided.

    Returns:
        List of Exercise objects in file order

    Raises:
        CatalogLoadError: If the file cannot be read or is not valid JSON
    """
    json_path = path or get_exercises_json_path()
    try:
        with open(json_path, encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise CatalogLoadError(f"Cannot read exercise catalog {json_path}: {e}") from e
    except json.JSONDecodeError as e:
        raise CatalogLoadError(f"Malformed exercise catalog {json_path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("exercises")
    if not isinstance(data, list):
        raise CatalogLoadError(f"Exercise catalog {json_path} has no exercise list")

    exercises = []
    seen_ids: set[str] = set()
    for ex_data in data:
        if not isinstance(ex_data, dict):
            logger.warning("Skipping catalog entry that is not an object: %r", ex_data)
            continue
        try:
            exercise = Exercise.from_dict(ex_data)
        except (ValueError, KeyError, TypeError) as e:
            logger.warning("Skipping invalid exercise %s: %s", ex_data.get("name", "unknown"), e)
            continue

        if exercise.id in seen_ids:
            logger.warning("Skipping duplicate exercise id %s", exercise.id)
            continue
        if exercise.category == Category.EXTENSION and exercise.break_extension_seconds <= 0:
            logger.warning("Skipping extension exercise %s without a break extension", exercise.id)
            continue

        seen_ids.add(exercise.id)
        exercises.append(exercise)

    return exercises


def load_catalog_or_empty(path: Path | None = None) -> list[Exercise]:
    """Load the catalog, treating a load failure as "no exercises available"."""
    try:
        return load_catalog(path)
    except CatalogLoadError as e:
        logger.error("No exercises available: %s", e)
        return []


def filter_catalog(
    exercises: list[Exercise],
    environment: Environment | None = None,
    category: Category | None = None,
    difficulty: str | None = None,
) -> list[Exercise]:
    """Filter exercises for listings.

    Args:
        exercises: Full list of exercises
        environment: Keep only this environment
        category: Keep only this category
        difficulty: Keep only this difficulty value

    Returns:
        Filtered list of exercises
    """
    filtered = []
    for exercise in exercises:
        if environment is not None and exercise.environment != environment:
            continue
        if category is not None and exercise.category != category:
            continue
        if difficulty is not None and exercise.difficulty.value != difficulty:
            continue
        filtered.append(exercise)
    return filtered
