"""Template catalog: read-only lookup of workout templates by id."""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Protocol

from app.schemas.template import ExerciseTemplate, WorkoutTemplate

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def exercise_slug(name: str) -> str:
    """Stable exercise id for a free-text name ("Bench Press" -> "bench-press"), matching catalog ids."""
    return _NON_ALNUM.sub("-", name.strip().lower()).strip("-")


class TemplateCatalog(Protocol):
    def get_by_id(self, template_id: str) -> WorkoutTemplate | None:
        ...


class InMemoryTemplateCatalog:
    """Templates held in memory, keyed by id (first definition of an id wins)."""

    def __init__(self, templates: Iterable[WorkoutTemplate] = ()) -> None:
        self._templates: dict[str, WorkoutTemplate] = {}
        for template in templates:
            self._templates.setdefault(template.id, template)

    def get_by_id(self, template_id: str) -> WorkoutTemplate | None:
        return self._templates.get(template_id)

    def list_all(self) -> list[WorkoutTemplate]:
        return list(self._templates.values())


def _ex(exercise_id: str, name: str, muscle_group: str, sets: int = 3) -> ExerciseTemplate:
    return ExerciseTemplate(id=exercise_id, name=name, muscle_group=muscle_group, default_sets=sets)


DEFAULT_TEMPLATES: tuple[WorkoutTemplate, ...] = (
    WorkoutTemplate(
        id="push-day",
        name="Push Day",
        exercises=(
            _ex("bench-press", "Bench Press", "Chest"),
            _ex("incline-dumbbell-press", "Incline Dumbbell Press", "Chest"),
            _ex("overhead-press", "Overhead Press", "Shoulders"),
            _ex("lateral-raise", "Lateral Raise", "Shoulders"),
            _ex("tricep-pushdown", "Tricep Pushdown", "Triceps"),
        ),
    ),
    WorkoutTemplate(
        id="pull-day",
        name="Pull Day",
        exercises=(
            _ex("pull-up", "Pull-Up", "Back"),
            _ex("barbell-row", "Barbell Row", "Back"),
            _ex("lat-pulldown", "Lat Pulldown", "Back"),
            _ex("face-pull", "Face Pull", "Rear Delts"),
            _ex("barbell-curl", "Barbell Curl", "Biceps"),
        ),
    ),
    WorkoutTemplate(
        id="leg-day",
        name="Leg Day",
        exercises=(
            _ex("squat", "Squat", "Legs"),
            _ex("leg-press", "Leg Press", "Legs"),
            _ex("romanian-deadlift", "Romanian Deadlift", "Hamstrings"),
            _ex("leg-curl", "Leg Curl", "Hamstrings"),
            _ex("calf-raise", "Calf Raise", "Calves", 2),
        ),
    ),
)
