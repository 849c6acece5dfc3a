"""Exercise catalog routes."""

from fastapi import APIRouter, Depends

from ...core.selection import is_floor_exercise
from ...data.exercise_loader import filter_catalog
from ...models.exercises import Category, Difficulty, Environment
from ...services.bootstrap import SessionContext
from ..deps import get_session

router = APIRouter(prefix="/exercises", tags=["exercises"])


@router.get("")
async def list_exercises(
    environment: Environment | None = None,
    category: Category | None = None,
    difficulty: Difficulty | None = None,
    context: SessionContext = Depends(get_session),
):
    """List catalog exercises, optionally filtered."""
    shown = filter_catalog(
        context.catalog,
        environment=environment,
        category=category,
        difficulty=difficulty.value if difficulty else None,
    )
    return [
        {**exercise.to_dict(), "is_floor": is_floor_exercise(exercise)}
        for exercise in shown
    ]
