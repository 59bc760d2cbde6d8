"""Finalized workout record schemas. Records are frozen once created."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class CompletedSet(BaseModel):
    model_config = ConfigDict(frozen=True)

    set_number: int
    weight: float = 0.0
    reps: int = 0
    is_completed: bool = False


class CompletedExercise(BaseModel):
    model_config = ConfigDict(frozen=True)

    exercise_id: str
    exercise_name: str
    muscle_group: str = ""
    total_volume: float = 0.0
    sets: tuple[CompletedSet, ...] = ()


class WorkoutRecord(BaseModel):
    """Immutable history entry. ``id`` is assigned by the history store on append."""

    model_config = ConfigDict(frozen=True)

    id: str | None = None
    date_label: str
    template_id: str | None = None
    template_name: str | None = None
    duration: int = 0  # seconds
    total_volume: float = 0.0
    total_sets: int = 0
    total_reps: int = 0
    created_at: datetime
    exercises: tuple[CompletedExercise, ...] = ()


class ExerciseHistoryRead(BaseModel):
    exercise_id: str
    entries: list[CompletedExercise] = []
