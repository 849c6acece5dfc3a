"""Request dependencies."""

from fastapi import Request

from ..services.bootstrap import SessionContext


def get_session(request: Request) -> SessionContext:
    """Get the live session from app state."""
    return request.app.state.session
