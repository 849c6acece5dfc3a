"""Settings routes."""

from fastapi import APIRouter, Body, Depends, HTTPException

from ...errors import ConfigError
from ...models.settings import Settings
from ...services.bootstrap import SessionContext
from ..deps import get_session

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("")
async def get_settings(context: SessionContext = Depends(get_session)):
    """Get the current settings."""
    return context.machine.settings.to_dict()


@router.put("")
async def update_settings(
    changes: dict = Body(...),
    context: SessionContext = Depends(get_session),
):
    """Update settings. Fields left out keep their current value."""
    current = context.machine.settings.to_dict()
    preferences = changes.pop("exercise_preferences", None)
    if isinstance(preferences, dict):
        current["exercise_preferences"] = {**current["exercise_preferences"], **preferences}

    try:
        updated = Settings.from_dict({**current, **changes})
    except ConfigError as e:
        raise HTTPException(status_code=422, detail=str(e))

    await context.settings_repo.save(updated)
    context.machine.update_settings(updated)
    return updated.to_dict()
