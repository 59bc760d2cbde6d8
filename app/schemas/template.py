"""Workout template schemas (read-only catalog entries)."""

from pydantic import BaseModel, ConfigDict, Field


class ExerciseTemplate(BaseModel):
    """One catalog exercise: what to seed into a session."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str = Field(..., min_length=1, max_length=255)
    muscle_group: str = ""
    default_sets: int = Field(3, ge=0)


class WorkoutTemplate(BaseModel):
    """Saved workout structure (name + exercises in order)."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str = Field(..., min_length=1, max_length=255)
    exercises: tuple[ExerciseTemplate, ...] = ()
