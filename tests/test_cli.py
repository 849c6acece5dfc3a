"""Tests for the command line interface."""

import asyncio

import pytest
from click.testing import CliRunner

from movemoro.cli import main
from movemoro.commands.run import TerminalView, _apply
from movemoro.db import HistoryRepository
from movemoro.models.history import CompletionHistory
from movemoro.models.session import Mode


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def data_dir(tmp_path):
    return tmp_path / "data"


@pytest.fixture
def invoke(runner, data_dir):
    def _invoke(*args, **kwargs):
        return runner.invoke(main, ["--data-dir", str(data_dir), *args], **kwargs)

    return _invoke


@pytest.fixture
def initialized(invoke):
    result = invoke("init")
    assert result.exit_code == 0, result.output
    return invoke


def test_version(runner):
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert "movemoro" in result.output
    assert "0.1.0" in result.output


def test_init(invoke, data_dir):
    result = invoke("init")

    assert result.exit_code == 0
    assert "Database initialized" in result.output
    assert "Exercise catalog loaded" in result.output
    assert (data_dir / "movemoro.db").exists()


def test_data_dir_from_environment(runner, data_dir):
    result = runner.invoke(main, ["init"], env={"MOVEMORO_DATA_DIR": str(data_dir)})

    assert result.exit_code == 0
    assert (data_dir / "movemoro.db").exists()


def test_requires_init(invoke):
    result = invoke("settings", "show")

    assert result.exit_code == 1
    assert "movemoro init" in result.output


class TestSettingsCommands:
    def test_show_defaults(self, initialized):
        result = initialized("settings", "show")

        assert result.exit_code == 0
        assert "Work: 25 min" in result.output
        assert "Long break: 15 min (every 4 sessions)" in result.output

    def test_set_and_show(self, initialized):
        result = initialized("settings", "set", "--work", "50", "--difficulty", "easy", "--exclude-floor")
        assert result.exit_code == 0
        assert "Settings saved!" in result.output

        shown = initialized("settings", "show").output
        assert "Work: 50 min" in shown
        assert "Difficulty: easy" in shown

    def test_set_invalid_value(self, initialized):
        result = initialized("settings", "set", "--sessions", "0")

        assert result.exit_code == 1
        assert "[ERROR]" in result.output

    def test_set_nothing(self, initialized):
        result = initialized("settings", "set")

        assert result.exit_code == 0
        assert "Nothing to change" in result.output

    def test_reset(self, initialized):
        initialized("settings", "set", "--work", "50")
        result = initialized("settings", "reset", "--yes")

        assert result.exit_code == 0
        assert "Work: 25 min" in result.output


class TestExerciseCommands:
    def test_list_filtered(self, invoke):
        result = invoke("exercises", "list", "-e", "office", "-c", "snack")

        assert result.exit_code == 0
        assert "office-chair-squats" in result.output
        assert "home-jumping-jacks" not in result.output
        assert "exercise(s)" in result.output

    def test_list_invalid_choice(self, invoke):
        result = invoke("exercises", "list", "-e", "gym")
        assert result.exit_code == 2

    def test_suggest(self, initialized):
        result = initialized("exercises", "suggest")

        assert result.exit_code == 0
        assert "Snack pair" in result.output
        assert "[office]" in result.output
        assert "[home]" in result.output
        assert "Break extensions" in result.output


def test_history_empty(initialized):
    result = initialized("history")

    assert result.exit_code == 0
    assert "No exercises completed yet." in result.output


def _seed_history(data_dir, *exercise_ids):
    history = CompletionHistory()
    for exercise_id in exercise_ids:
        history.append(exercise_id)
    asyncio.run(HistoryRepository(data_dir / "movemoro.db").save(history))


def test_history_clear(initialized, data_dir):
    _seed_history(data_dir, "office-chair-squats")
    assert "No exercises completed yet." not in initialized("history").output

    result = initialized("history", "--clear", input="y\n")

    assert result.exit_code == 0
    assert "Exercise history cleared." in result.output
    assert "No exercises completed yet." in initialized("history").output


def test_history_clear_declined(initialized, data_dir):
    _seed_history(data_dir, "office-chair-squats")

    result = initialized("history", "--clear", input="n\n")

    assert "Cancelled." in result.output
    assert "No exercises completed yet." not in initialized("history").output


def test_stats_empty(initialized):
    result = initialized("stats", "--all")

    assert result.exit_code == 0
    assert "Sessions completed: 0" in result.output
    assert "[locked] First Steps" in result.output
    assert "0/19 unlocked" in result.output


class TestInteractiveHelpers:
    def test_apply_dispatches_intents(self, machine):
        _apply(machine, "toggle", None)
        assert machine.timer.is_running

        _apply(machine, "skip", None)
        assert machine.state.awaiting_exercise

        _apply(machine, "confirm", machine.choices[0].id)
        assert machine.mode == Mode.BREAK

    def test_view_flags_changes(self):
        view = TerminalView()
        view.on_mode_change(Mode.BREAK, False)

        assert view.changed.is_set()
