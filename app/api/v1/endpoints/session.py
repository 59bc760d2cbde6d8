"""Active session endpoints: start, edit sets/exercises, finish or cancel."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import get_engine, require_active_session
from app.core.exceptions import TemplateNotFoundError
from app.schemas.session import (
    ActiveSessionRead,
    ExerciseAdd,
    GhostSet,
    SessionFinish,
    SessionProgress,
    SessionStart,
    SetActionRead,
    SetUpdate,
)
from app.schemas.workout import WorkoutRecord
from app.services.engine import WorkoutEngine

router = APIRouter()


def _snapshot(engine: WorkoutEngine) -> ActiveSessionRead:
    return ActiveSessionRead.from_session(require_active_session(engine))


@router.get("", response_model=ActiveSessionRead | None)
async def get_session(engine: WorkoutEngine = Depends(get_engine)):
    """Current in-progress session, or null when none is active."""
    session = engine.session.active
    return ActiveSessionRead.from_session(session) if session else None


@router.post("", response_model=ActiveSessionRead, status_code=201)
async def start_session(
    payload: SessionStart,
    engine: WorkoutEngine = Depends(get_engine),
):
    """Start a session (free, or seeded from a template). Replaces any active session."""
    if payload.template_id:
        try:
            session = engine.session.start_from_template_id(payload.template_id, name=payload.name)
        except TemplateNotFoundError:
            raise HTTPException(status_code=404, detail="Template not found")
    else:
        session = engine.session.start(name=payload.name)
    return ActiveSessionRead.from_session(session)


@router.post("/cancel", status_code=204)
async def cancel_session(engine: WorkoutEngine = Depends(get_engine)):
    """Discard the session without recording anything."""
    if not engine.session.cancel():
        raise HTTPException(status_code=409, detail="No active session")
    return None


@router.post("/finish", response_model=WorkoutRecord, status_code=201)
async def finish_session(
    payload: SessionFinish,
    engine: WorkoutEngine = Depends(get_engine),
):
    """Finalize into a history record. Duration defaults to time since start."""
    record = engine.finish(payload.duration_seconds)
    if record is None:
        raise HTTPException(status_code=409, detail="No active session")
    return record


@router.get("/progress", response_model=SessionProgress)
async def session_progress(engine: WorkoutEngine = Depends(get_engine)):
    require_active_session(engine)
    return engine.session.progress()


@router.get("/previous-performance", response_model=list[GhostSet])
async def previous_performance(name: str, engine: WorkoutEngine = Depends(get_engine)):
    """
    Ghost values: the sets logged last time for an exercise with this exact name.
    Empty list when no previous performance exists.
    """
    sets = engine.session.previous_performance(name) or []
    return [GhostSet(set_number=s.set_number, weight=s.weight, reps=s.reps) for s in sets]


@router.post("/exercises", response_model=ActiveSessionRead, status_code=201)
async def add_exercise(
    payload: ExerciseAdd,
    engine: WorkoutEngine = Depends(get_engine),
):
    require_active_session(engine)
    engine.session.add_exercise(payload.name, payload.muscle_group, exercise_id=payload.exercise_id)
    return _snapshot(engine)


@router.delete("/exercises/{exercise_id}", response_model=ActiveSessionRead)
async def remove_exercise(exercise_id: str, engine: WorkoutEngine = Depends(get_engine)):
    require_active_session(engine)
    engine.session.remove_exercise(exercise_id)
    return _snapshot(engine)


@router.post("/exercises/{exercise_id}/toggle", response_model=ActiveSessionRead)
async def toggle_exercise(exercise_id: str, engine: WorkoutEngine = Depends(get_engine)):
    """Flip the expanded/collapsed display flag."""
    require_active_session(engine)
    engine.session.toggle_expand(exercise_id)
    return _snapshot(engine)


@router.post("/exercises/{exercise_id}/sets", response_model=ActiveSessionRead, status_code=201)
async def add_set(exercise_id: str, engine: WorkoutEngine = Depends(get_engine)):
    require_active_session(engine)
    engine.session.add_set(exercise_id)
    return _snapshot(engine)


@router.patch("/exercises/{exercise_id}/sets/{set_id}", response_model=ActiveSessionRead)
async def update_set(
    exercise_id: str,
    set_id: str,
    payload: SetUpdate,
    engine: WorkoutEngine = Depends(get_engine),
):
    """Store raw weight/reps text; it is only parsed when the session finishes."""
    require_active_session(engine)
    engine.session.update_set(exercise_id, set_id, payload.field, payload.value)
    return _snapshot(engine)


@router.post("/exercises/{exercise_id}/sets/{set_id}/complete", response_model=SetActionRead)
async def complete_set(exercise_id: str, set_id: str, engine: WorkoutEngine = Depends(get_engine)):
    """Complete a pending set (starts the rest timer); on a completed set this deletes it."""
    require_active_session(engine)
    action = engine.session.complete_set(exercise_id, set_id)
    return SetActionRead(action=action, session=_snapshot(engine))


@router.delete("/exercises/{exercise_id}/sets/{set_id}", response_model=ActiveSessionRead)
async def delete_set(exercise_id: str, set_id: str, engine: WorkoutEngine = Depends(get_engine)):
    require_active_session(engine)
    engine.session.delete_set(exercise_id, set_id)
    return _snapshot(engine)
