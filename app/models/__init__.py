"""ORM models - import all so Base.metadata is complete for migrations."""

from app.models.workout import CompletedExerciseRow, CompletedSetRow, WorkoutRecordRow

__all__ = [
    "CompletedExerciseRow",
    "CompletedSetRow",
    "WorkoutRecordRow",
]
