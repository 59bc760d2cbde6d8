"""Shared enums for the engine and API."""

from enum import Enum


class SetField(str, Enum):
    """Editable raw-text fields of a set entry."""

    WEIGHT = "weight"
    REPS = "reps"


class SetAction(str, Enum):
    """What the complete button did: its meaning flips once a set is completed."""

    COMPLETED = "completed"  # pending -> completed
    DELETED = "deleted"  # completed -> removed


class TimerState(str, Enum):
    """Rest timer automaton states."""

    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    EXPIRED = "expired"


class AchievementCategory(str, Enum):
    """Achievement families; each maps to one predicate in the evaluator."""

    WORKOUT = "workout"  # total workouts
    VOLUME = "volume"  # total kg lifted
    STREAK = "streak"  # consecutive training days
    SPECIAL = "special"  # per-id rules (weekly goal, early bird, ...)
