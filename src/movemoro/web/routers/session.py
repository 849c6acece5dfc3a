"""Session control routes."""

from fastapi import APIRouter, Depends, HTTPException

from ...services.bootstrap import SessionContext
from ..deps import get_session

router = APIRouter(prefix="/session", tags=["session"])


def _state(context: SessionContext) -> dict:
    return context.machine.snapshot().to_dict()


@router.get("")
async def get_state(context: SessionContext = Depends(get_session)):
    """Current mode, timer and pending choices."""
    data = _state(context)
    data["counter"] = context.machine.state.get_counter_display(
        context.machine.settings.sessions_before_long_break
    )
    return data


@router.post("/toggle")
async def toggle(context: SessionContext = Depends(get_session)):
    """Start or pause the timer."""
    context.machine.toggle_timer()
    return _state(context)


@router.post("/skip")
async def skip(context: SessionContext = Depends(get_session)):
    """Complete the current timer now."""
    context.machine.skip()
    return _state(context)


@router.post("/reset")
async def reset(context: SessionContext = Depends(get_session)):
    """Restart the current mode's timer, stopped."""
    context.machine.reset()
    return _state(context)


@router.post("/regenerate")
async def regenerate(context: SessionContext = Depends(get_session)):
    """Draw a different snack pair."""
    if not context.machine.state.awaiting_exercise:
        raise HTTPException(status_code=409, detail="No exercise choice pending")
    context.machine.regenerate()
    return _state(context)


@router.post("/confirm/{exercise_id}")
async def confirm_exercise(exercise_id: str, context: SessionContext = Depends(get_session)):
    """Confirm a completed snack exercise and start the break."""
    if not context.machine.confirm_exercise(exercise_id):
        raise HTTPException(status_code=409, detail=f"Cannot confirm exercise {exercise_id}")
    return _state(context)


@router.post("/offer-extension")
async def offer_extension(context: SessionContext = Depends(get_session)):
    """Show the extension candidates now instead of waiting."""
    context.machine.offer_extension()
    return _state(context)


@router.post("/extension/{exercise_id}")
async def confirm_extension(exercise_id: str, context: SessionContext = Depends(get_session)):
    """Confirm a completed extension exercise and add its bonus time."""
    if not context.machine.confirm_extension(exercise_id):
        raise HTTPException(status_code=409, detail=f"Cannot extend with {exercise_id}")
    return _state(context)


@router.post("/skip-extension")
async def skip_extension(context: SessionContext = Depends(get_session)):
    """Dismiss the extension offer."""
    context.machine.skip_extension()
    return _state(context)
