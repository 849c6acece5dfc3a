"""Wiring of a live session from persisted state."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from ..core.events import Notifier, SessionListener
from ..core.scheduler import AsyncioScheduler, Scheduler
from ..core.selection import ExerciseSelector
from ..core.session import SessionMachine
from ..data.exercise_loader import load_catalog_or_empty
from ..db.engine import init_db
from ..db.repositories import HistoryRepository, SettingsRepository, TimerStateRepository
from ..models.exercises import Exercise
from .persistence import PersistenceListener

logger = logging.getLogger(__name__)


@dataclass
class SessionContext:
    """A running session and the collaborators it was built with."""

    machine: SessionMachine
    persistence: PersistenceListener
    settings_repo: SettingsRepository
    catalog: list[Exercise]
    resumed: bool = False


async def open_session(
    db_path: Path,
    *,
    scheduler: Scheduler | None = None,
    listeners: Sequence[SessionListener] = (),
    notifier: Notifier | None = None,
    catalog_path: Path | None = None,
    resume: bool = True,
) -> SessionContext:
    """Build a session machine from the stored settings, history and catalog.

    A saved session younger than five minutes is restored (paused). With
    ``resume=False`` the saved session is discarded.
    """
    await init_db(db_path)

    settings_repo = SettingsRepository(db_path)
    settings = await settings_repo.get()
    history = await HistoryRepository(db_path).load()
    catalog = load_catalog_or_empty(catalog_path)

    persistence = PersistenceListener(db_path)
    selector = ExerciseSelector(catalog, history, settings.exercise_preferences)
    machine = SessionMachine(
        settings,
        selector,
        scheduler=scheduler or AsyncioScheduler(),
        listeners=[persistence, *listeners],
        notifier=notifier,
    )

    resumed = False
    timer_state_repo = TimerStateRepository(db_path)
    if resume:
        saved = await timer_state_repo.load_fresh()
        if saved is not None:
            machine.restore(saved)
            resumed = True
    else:
        await timer_state_repo.clear()

    return SessionContext(
        machine=machine,
        persistence=persistence,
        settings_repo=settings_repo,
        catalog=catalog,
        resumed=resumed,
    )


async def close_session(context: SessionContext) -> None:
    """Pause the timer, save the resume record and wait for pending writes."""
    context.machine.pause()
    await context.persistence.flush()
    await context.persistence.save_session(context.machine.snapshot())
