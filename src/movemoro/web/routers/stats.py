"""Statistics and achievements routes."""

from fastapi import APIRouter, Request

from ...models.achievements import ACHIEVEMENTS
from ...services.stats import StatsService

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("")
async def get_stats(request: Request):
    """Lifetime counters and every achievement with its unlock state."""
    current = await StatsService(request.app.state.db_path).get_stats()
    return {
        "stats": current.to_dict(),
        "achievements": [achievement.to_dict(current) for achievement in ACHIEVEMENTS],
    }
