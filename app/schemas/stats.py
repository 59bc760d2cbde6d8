"""Derived statistics. Always recomputed from history, never edited in place."""

from datetime import date

from pydantic import BaseModel, ConfigDict


class PersonalRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    weight: float
    reps: int
    date: str  # date label of the record that set it


class WorkoutStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_workouts: int = 0
    this_week_workouts: int = 0
    this_month_workouts: int = 0
    total_volume: float = 0.0
    average_duration: int = 0
    favorite_exercise: str | None = None
    personal_records: dict[str, PersonalRecord] = {}

    # Streak engine output; None means "not available" to the evaluator
    current_streak: int | None = 0
    longest_streak: int = 0
    last_workout_date: date | None = None

    has_early_workout: bool = False
    has_late_workout: bool = False
