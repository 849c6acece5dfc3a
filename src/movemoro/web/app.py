"""FastAPI application for the movemoro JSON API."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI

from .. import __version__
from ..core.events import LoggingNotifier
from ..core.scheduler import AsyncioScheduler
from ..db.engine import get_db_path
from ..services.bootstrap import close_session, open_session
from .routers import exercises, session, settings, stats

logger = logging.getLogger(__name__)


def create_app(data_dir: Path | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    The app owns one live session, opened on startup and saved on shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        db_path = get_db_path(data_dir)
        app.state.db_path = db_path
        app.state.session = await open_session(
            db_path,
            scheduler=AsyncioScheduler(),
            notifier=LoggingNotifier(),
        )
        logger.info("Session opened from %s", db_path)
        yield
        await close_session(app.state.session)

    app = FastAPI(
        title="movemoro",
        description="Work/break intervals with exercise snacks",
        version=__version__,
        lifespan=lifespan,
    )

    app.include_router(session.router)
    app.include_router(exercises.router)
    app.include_router(settings.router)
    app.include_router(stats.router)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    return app
