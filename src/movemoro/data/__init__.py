"""Data loading utilities."""

from .exercise_loader import (
    filter_catalog,
    get_exercises_json_path,
    load_catalog,
    load_catalog_or_empty,
)

__all__ = [
    "filter_catalog",
    "get_exercises_json_path",
    "load_catalog",
    "load_catalog_or_empty",
]
