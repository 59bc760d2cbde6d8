"""Workout statistics snapshot for dashboards."""

from fastapi import APIRouter, Depends

from app.api.deps import get_engine
from app.schemas.stats import WorkoutStats
from app.services.engine import WorkoutEngine

router = APIRouter()


@router.get("", response_model=WorkoutStats)
async def get_stats(engine: WorkoutEngine = Depends(get_engine)):
    """
    Totals, this week/month counts, average duration, favorite exercise,
    personal records by exercise id and the current/longest streak.
    """
    return engine.refresh()
