"""Statistics aggregator: a full, pure fold of workout history into WorkoutStats.

Recomputed from scratch after every history change.

History is folded oldest-first (ties by id), which fixes the tie-breaks:
- favorite exercise: the name that first reached the highest count
- personal record: the earliest set that reached the highest weight
"""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Iterable
from datetime import date, datetime, timedelta

from app.core.constants import EARLY_BIRD_HOUR, NIGHT_OWL_HOUR
from app.core.timeutils import local_date, start_of_month, start_of_week, to_local
from app.schemas.stats import PersonalRecord, WorkoutStats
from app.schemas.workout import WorkoutRecord

SUNDAY = 6


def chronological(history: Iterable[WorkoutRecord]) -> list[WorkoutRecord]:
    """Oldest first; equal timestamps ordered by id so the fold is deterministic."""
    return sorted(history, key=lambda r: (r.created_at, r.id or ""))


def compute_streak(workout_days: Iterable[date], today: date) -> tuple[int, int]:
    """
    Return (current_streak, longest_streak) in consecutive calendar days.
    The current streak only counts if the latest workout day is today or yesterday.
    """
    days = sorted(set(workout_days), reverse=True)
    if not days:
        return 0, 0

    current = 0
    if days[0] >= today - timedelta(days=1):
        current = 1
        for i in range(1, len(days)):
            if days[i] == days[i - 1] - timedelta(days=1):
                current += 1
            else:
                break

    longest = 1
    run = 1
    for i in range(1, len(days)):
        if days[i] == days[i - 1] - timedelta(days=1):
            run += 1
            longest = max(longest, run)
        else:
            run = 1
    return current, longest


def _favorite(counts: Counter[str]) -> str | None:
    favorite: str | None = None
    best = 0
    # Counter keeps first-insertion order, i.e. oldest appearance first
    for name, count in counts.items():
        if count > best:
            best = count
            favorite = name
    return favorite


def recompute(
    history: Iterable[WorkoutRecord],
    now: datetime,
    first_weekday: int = SUNDAY,
) -> WorkoutStats:
    records = chronological(history)
    week_start = start_of_week(now, first_weekday)
    month_start = start_of_month(now)

    total_volume = 0.0
    total_duration = 0
    this_week = 0
    this_month = 0
    exercise_counts: Counter[str] = Counter()
    personal_records: dict[str, PersonalRecord] = {}
    workout_days: set[date] = set()
    early = late = False

    for record in records:
        total_volume += record.total_volume
        total_duration += record.duration
        if record.created_at >= week_start:
            this_week += 1
        if record.created_at >= month_start:
            this_month += 1

        workout_days.add(local_date(record.created_at, now))
        hour = to_local(record.created_at, now).hour
        early = early or hour < EARLY_BIRD_HOUR
        late = late or hour >= NIGHT_OWL_HOUR

        for exercise in record.exercises:
            exercise_counts[exercise.exercise_name or "Unknown"] += 1
            for s in exercise.sets:
                current = personal_records.get(exercise.exercise_id)
                if current is None or s.weight > current.weight:
                    personal_records[exercise.exercise_id] = PersonalRecord(
                        weight=s.weight, reps=s.reps, date=record.date_label
                    )

    total = len(records)
    current_streak, longest_streak = compute_streak(workout_days, now.date())
    return WorkoutStats(
        total_workouts=total,
        this_week_workouts=this_week,
        this_month_workouts=this_month,
        total_volume=total_volume,
        average_duration=math.floor(total_duration / total + 0.5) if total else 0,  # half-up
        favorite_exercise=_favorite(exercise_counts),
        personal_records=personal_records,
        current_streak=current_streak,
        longest_streak=longest_streak,
        last_workout_date=max(workout_days) if workout_days else None,
        has_early_workout=early,
        has_late_workout=late,
    )
