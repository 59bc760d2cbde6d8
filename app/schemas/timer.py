"""Rest timer schemas."""

from pydantic import BaseModel, Field

from app.core.constants import MAX_REST_SECONDS, REST_ADJUST_STEP_SECONDS
from app.core.enums import TimerState


class RestTimerSnapshot(BaseModel):
    state: TimerState
    total_seconds: int
    remaining_seconds: int


class TimerStart(BaseModel):
    seconds: int | None = Field(None, ge=0, le=MAX_REST_SECONDS)


class TimerAdjust(BaseModel):
    delta: int = REST_ADJUST_STEP_SECONDS


class TimerPreset(BaseModel):
    seconds: int = Field(..., ge=0, le=MAX_REST_SECONDS)
