"""Completion finalizer: turn an active session into an immutable workout record.

Raw set text is parsed here and nowhere earlier, so the client can keep
editing freely during the session. Invalid or empty text counts as 0.
Every set is kept, completed or not, so skipped sets stay visible in history.
"""

from __future__ import annotations

import math
import re
from datetime import datetime

from app.schemas.session import ActiveSession, ExerciseInSession
from app.schemas.workout import CompletedExercise, CompletedSet, WorkoutRecord

_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

DEFAULT_DATE_LABEL_FORMAT = "%d.%m.%Y"


def parse_int_or_zero(text: str | None) -> int:
    """Leading integer of ``text`` ("8.5" -> 8, "12 reps" -> 12); 0 when there is none."""
    if not text:
        return 0
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def parse_float_or_zero(text: str | None) -> float:
    """Leading decimal number of ``text`` ("62,5" -> 62.0, "100kg" -> 100.0); 0 when there is none."""
    if not text:
        return 0.0
    match = _FLOAT_PREFIX.match(text)
    if not match:
        return 0.0
    value = float(match.group(1))
    return value if math.isfinite(value) else 0.0


def _complete_exercise(exercise: ExerciseInSession) -> CompletedExercise:
    sets = tuple(
        CompletedSet(
            set_number=position + 1,
            weight=parse_float_or_zero(entry.weight),
            reps=parse_int_or_zero(entry.reps),
            is_completed=entry.completed,
        )
        for position, entry in enumerate(exercise.sets)
    )
    return CompletedExercise(
        exercise_id=exercise.exercise_id,
        exercise_name=exercise.name,
        muscle_group=exercise.muscle_group,
        total_volume=sum(s.weight * s.reps for s in sets),
        sets=sets,
    )


def finish(
    session: ActiveSession,
    elapsed_duration: int | float,
    now: datetime,
    date_label_format: str = DEFAULT_DATE_LABEL_FORMAT,
) -> WorkoutRecord:
    """Build the record for ``session``. ``now`` is the finish time (not the session start)."""
    exercises = tuple(_complete_exercise(e) for e in session.exercises)
    return WorkoutRecord(
        date_label=now.strftime(date_label_format),
        template_id=session.template_id,
        template_name=session.name,
        duration=max(0, int(elapsed_duration)),
        total_volume=sum(e.total_volume for e in exercises),
        total_sets=sum(len(e.sets) for e in exercises),
        total_reps=sum(s.reps for e in exercises for s in e.sets),
        created_at=now,
        exercises=exercises,
    )
