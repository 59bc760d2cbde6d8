"""Achievements and points."""

from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import get_engine
from app.schemas.achievement import Achievement, AchievementCheckRead, AchievementsRead
from app.services.engine import WorkoutEngine

router = APIRouter()


@router.get("", response_model=AchievementsRead)
async def list_achievements(engine: WorkoutEngine = Depends(get_engine)):
    return AchievementsRead(
        total_points=engine.achievements.total_points,
        achievements=engine.achievements.achievements,
    )


@router.post("/check", response_model=AchievementCheckRead)
async def check_achievements(engine: WorkoutEngine = Depends(get_engine)):
    """Evaluate against current stats; repeated calls never award twice."""
    newly_unlocked = engine.achievements.check(engine.stats)
    return AchievementCheckRead(newly_unlocked=newly_unlocked, total_points=engine.achievements.total_points)


@router.post("/{achievement_id}/unlock", response_model=Achievement)
async def unlock_achievement(achievement_id: str, engine: WorkoutEngine = Depends(get_engine)):
    achievement = engine.achievements.unlock(achievement_id)
    if achievement is None:
        raise HTTPException(status_code=404, detail="Achievement not found")
    return achievement
