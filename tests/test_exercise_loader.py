"""Tests for the exercise catalog loader."""

import json

import pytest

from movemoro.core.selection import is_floor_exercise
from movemoro.data.exercise_loader import filter_catalog, load_catalog, load_catalog_or_empty
from movemoro.errors import CatalogLoadError
from movemoro.models.exercises import Category, Environment


def write_catalog(tmp_path, payload):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


SNACK = {
    "id": "office-squats",
    "name": "Chair Squats",
    "environment": "office",
    "category": "snack",
    "difficulty": "easy",
}


class TestBundledCatalog:
    def test_loads(self):
        catalog = load_catalog()
        assert len(catalog) >= 20
        assert len({e.id for e in catalog}) == len(catalog)

    def test_has_snacks_for_both_environments(self):
        catalog = load_catalog()
        for environment in Environment:
            assert filter_catalog(catalog, environment=environment, category=Category.SNACK)

    def test_extensions_grant_bonus(self):
        extensions = filter_catalog(load_catalog(), category=Category.EXTENSION)
        assert len(extensions) >= 3
        assert all(e.break_extension_seconds > 0 for e in extensions)

    def test_floor_exercises_present(self):
        catalog = load_catalog()
        assert any(is_floor_exercise(e) for e in catalog)
        assert not all(is_floor_exercise(e) for e in catalog)


class TestLoadCatalog:
    def test_wrapped_list(self, tmp_path):
        path = write_catalog(tmp_path, {"exercises": [SNACK]})
        assert [e.id for e in load_catalog(path)] == ["office-squats"]

    def test_skips_invalid_and_duplicate_entries(self, tmp_path):
        path = write_catalog(tmp_path, [
            SNACK,
            dict(SNACK, name="Duplicate"),
            {"name": "No id"},
            dict(SNACK, id="bad-env", environment="gym"),
            "not an object",
        ])
        catalog = load_catalog(path)

        assert [e.name for e in catalog] == ["Chair Squats"]

    def test_skips_extension_without_bonus(self, tmp_path):
        path = write_catalog(tmp_path, [
            dict(SNACK, id="ext-none", category="extension"),
            dict(SNACK, id="ext-walk", category="extension", break_extension_seconds=300),
        ])
        assert [e.id for e in load_catalog(path)] == ["ext-walk"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogLoadError):
            load_catalog(tmp_path / "missing.json")

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(CatalogLoadError):
            load_catalog(path)

    def test_no_exercise_list(self, tmp_path):
        with pytest.raises(CatalogLoadError):
            load_catalog(write_catalog(tmp_path, {"items": []}))

    def test_or_empty(self, tmp_path):
        assert load_catalog_or_empty(tmp_path / "missing.json") == []


def test_filter_catalog(sample_catalog):
    result = filter_catalog(
        sample_catalog, environment=Environment.HOME, category=Category.SNACK, difficulty="medium"
    )
    assert [e.id for e in result] == ["home-plank"]
