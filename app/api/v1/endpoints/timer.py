"""Rest timer controls."""

from fastapi import APIRouter, Depends

from app.api.deps import get_engine
from app.schemas.timer import RestTimerSnapshot, TimerAdjust, TimerPreset, TimerStart
from app.services.engine import WorkoutEngine

router = APIRouter()


@router.get("", response_model=RestTimerSnapshot)
async def get_timer(engine: WorkoutEngine = Depends(get_engine)):
    return engine.timer.snapshot()


@router.post("/start", response_model=RestTimerSnapshot)
async def start_timer(payload: TimerStart, engine: WorkoutEngine = Depends(get_engine)):
    """Start (or restart) the countdown; defaults to the profile's rest time."""
    engine.timer.start(payload.seconds)
    return engine.timer.snapshot()


@router.post("/toggle", response_model=RestTimerSnapshot)
async def toggle_timer(engine: WorkoutEngine = Depends(get_engine)):
    """Pause when running, resume when paused."""
    engine.timer.toggle()
    return engine.timer.snapshot()


@router.post("/reset", response_model=RestTimerSnapshot)
async def reset_timer(engine: WorkoutEngine = Depends(get_engine)):
    engine.timer.reset()
    return engine.timer.snapshot()


@router.post("/adjust", response_model=RestTimerSnapshot)
async def adjust_timer(payload: TimerAdjust, engine: WorkoutEngine = Depends(get_engine)):
    """Add or remove seconds (floor 0)."""
    engine.timer.adjust(payload.delta)
    return engine.timer.snapshot()


@router.post("/skip", response_model=RestTimerSnapshot)
async def skip_timer(engine: WorkoutEngine = Depends(get_engine)):
    engine.timer.skip()
    return engine.timer.snapshot()


@router.post("/preset", response_model=RestTimerSnapshot)
async def preset_timer(payload: TimerPreset, engine: WorkoutEngine = Depends(get_engine)):
    engine.timer.use_preset(payload.seconds)
    return engine.timer.snapshot()
