"""Workout history: recent records, calendar ranges, per-exercise history, deletion."""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import get_engine
from app.core.constants import RECENT_WORKOUTS_LIMIT
from app.core.timeutils import align
from app.schemas.workout import ExerciseHistoryRead, WorkoutRecord
from app.services.engine import WorkoutEngine

router = APIRouter()


@router.get("", response_model=list[WorkoutRecord])
async def list_records(
    engine: WorkoutEngine = Depends(get_engine),
    limit: int = RECENT_WORKOUTS_LIMIT,
):
    """Most recent records first."""
    return engine.history.recent(limit)


@router.get("/range", response_model=list[WorkoutRecord])
async def records_in_range(
    from_date: datetime,
    to_date: datetime,
    engine: WorkoutEngine = Depends(get_engine),
):
    """
    Records created between from_date and to_date, both inclusive (calendar/day views).
    Bounds without an offset are read as local wall-clock time.
    """
    if align(from_date, to_date) > to_date:
        raise HTTPException(status_code=400, detail="from_date must not be after to_date")
    return engine.history.query_by_date_range(from_date, to_date)


@router.get("/exercises/{exercise_id}", response_model=ExerciseHistoryRead)
async def exercise_history(exercise_id: str, engine: WorkoutEngine = Depends(get_engine)):
    return ExerciseHistoryRead(exercise_id=exercise_id, entries=engine.history.exercise_history(exercise_id))


@router.get("/{record_id}", response_model=WorkoutRecord)
async def get_record(record_id: str, engine: WorkoutEngine = Depends(get_engine)):
    record = engine.history.find_by_id(record_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Workout record not found")
    return record


@router.delete("/{record_id}", status_code=204)
async def delete_record(record_id: str, engine: WorkoutEngine = Depends(get_engine)):
    """Delete a record permanently; stats are recomputed."""
    if not engine.delete_record(record_id):
        raise HTTPException(status_code=404, detail="Workout record not found")
    return None


@router.post("/reload")
async def reload_history(engine: WorkoutEngine = Depends(get_engine)):
    """Replace local history with the persistence mirror's records."""
    count = await engine.load_from_persistence()
    return {"count": count}


@router.post("/reset", status_code=204)
async def reset_history(engine: WorkoutEngine = Depends(get_engine)):
    """Remove every record. Unlocked achievements are kept."""
    engine.reset_all_progress()
    return None
