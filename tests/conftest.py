"""Pytest configuration and fixtures."""

import random
import tempfile
from pathlib import Path

import pytest

from movemoro.core.events import SessionListener
from movemoro.core.selection import ExerciseSelector
from movemoro.core.session import SessionMachine
from movemoro.models.exercises import Category, Difficulty, Environment, Exercise
from movemoro.models.history import CompletionHistory
from movemoro.models.settings import Settings


class FakeClock:
    """Wall clock that only moves when told to."""

    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def jump(self, seconds: float) -> None:
        """Move the clock without running any scheduled call (host suspended)."""
        self.now = round(self.now + seconds, 6)


class _ManualCall:
    def __init__(self, due: float, callback, interval: float | None = None):
        self.due = due
        self.callback = callback
        self.interval = interval
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Scheduler driven by ``advance``; runs due calls in time order."""

    def __init__(self, clock: FakeClock):
        self.clock = clock
        self.calls: list[_ManualCall] = []

    def call_repeatedly(self, interval: float, callback) -> _ManualCall:
        call = _ManualCall(round(self.clock.now + interval, 6), callback, interval)
        self.calls.append(call)
        return call

    def call_later(self, delay: float, callback) -> _ManualCall:
        call = _ManualCall(round(self.clock.now + delay, 6), callback)
        self.calls.append(call)
        return call

    @property
    def active(self) -> list[_ManualCall]:
        return [c for c in self.calls if not c.cancelled]

    def advance(self, seconds: float) -> None:
        target = round(self.clock.now + seconds, 6)
        while True:
            due = [c for c in self.active if c.due <= target]
            if not due:
                break
            call = min(due, key=lambda c: c.due)
            self.clock.now = max(self.clock.now, call.due)
            if call.interval is None:
                call.cancelled = True
            else:
                call.due = round(call.due + call.interval, 6)
            call.callback()
        self.clock.now = target
        self.calls = self.active


class RecordingListener(SessionListener):
    """Collects every session event as (name, args)."""

    def __init__(self):
        self.events = []

    def on_tick(self, remaining_seconds):
        self.events.append(("tick", remaining_seconds))

    def on_mode_change(self, mode, is_long_break):
        self.events.append(("mode", mode, is_long_break))

    def on_exercise_choices(self, kind, exercises):
        self.events.append(("choices", kind, [e.id for e in exercises]))

    def on_extension_granted(self, before_seconds, after_seconds, bonus_seconds):
        self.events.append(("extension", before_seconds, after_seconds, bonus_seconds))

    def on_exercise_recorded(self, exercise, history):
        self.events.append(("recorded", exercise.id))

    def on_session_complete(self, session_count, work_minutes):
        self.events.append(("session", session_count, work_minutes))

    def named(self, name):
        return [e for e in self.events if e[0] == name]


def make_exercise(
    exercise_id,
    environment=Environment.OFFICE,
    category=Category.SNACK,
    difficulty=Difficulty.EASY,
    name=None,
    instructions="",
    equipment=(),
    break_extension_seconds=0,
):
    return Exercise(
        id=exercise_id,
        name=name or exercise_id.replace("-", " ").title(),
        environment=environment,
        category=category,
        difficulty=difficulty,
        instructions=instructions,
        equipment=frozenset(equipment),
        break_extension_seconds=break_extension_seconds,
    )


@pytest.fixture
def temp_db_path():
    """Create a temporary database path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "test.db"


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scheduler(clock):
    return ManualScheduler(clock)


@pytest.fixture
def sample_catalog():
    """Three office snacks, three home snacks and three extensions."""
    return [
        make_exercise("office-squats", Environment.OFFICE),
        make_exercise("office-shrugs", Environment.OFFICE, difficulty=Difficulty.MEDIUM),
        make_exercise("office-desk-pushups", Environment.OFFICE, equipment=["desk"]),
        make_exercise("home-jacks", Environment.HOME),
        make_exercise("home-plank", Environment.HOME, name="Plank", difficulty=Difficulty.MEDIUM),
        make_exercise(
            "home-bridges",
            Environment.HOME,
            name="Hip Lifts",
            instructions="Lie on your back and lift your hips.",
        ),
        make_exercise(
            "ext-walk", Environment.OFFICE, Category.EXTENSION, break_extension_seconds=300
        ),
        make_exercise(
            "ext-stairs",
            Environment.OFFICE,
            Category.EXTENSION,
            difficulty=Difficulty.HARD,
            equipment=["stairs"],
            break_extension_seconds=420,
        ),
        make_exercise(
            "ext-mobility",
            Environment.HOME,
            Category.EXTENSION,
            difficulty=Difficulty.MEDIUM,
            break_extension_seconds=180,
        ),
    ]


@pytest.fixture
def listener():
    return RecordingListener()


@pytest.fixture
def machine_factory(sample_catalog, scheduler, clock, listener):
    """Build a session machine on the manual scheduler."""

    def factory(settings=None, catalog=None, history=None):
        selector = ExerciseSelector(
            sample_catalog if catalog is None else catalog,
            history or CompletionHistory(),
            rng=random.Random(7),
        )
        return SessionMachine(
            settings or Settings(),
            selector,
            scheduler=scheduler,
            listeners=[listener],
            clock=clock,
        )

    return factory


@pytest.fixture
def machine(machine_factory):
    return machine_factory()
