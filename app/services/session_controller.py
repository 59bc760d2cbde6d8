"""Session controller: owns the single active workout session.

All mutations target the one optional ``ActiveSession``. Unknown exercise or
set ids, and mutations without an active session, are silent no-ops.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from app.core.constants import FREE_SESSION_NAME
from app.core.enums import SetAction, SetField
from app.core.exceptions import TemplateNotFoundError
from app.core.timeutils import local_now
from app.schemas.session import (
    ActiveSession,
    ExerciseInSession,
    SessionProgress,
    SetEntry,
)
from app.schemas.template import ExerciseTemplate, WorkoutTemplate
from app.schemas.workout import CompletedSet
from app.services.catalog import TemplateCatalog, exercise_slug
from app.services.events import EventBus, SetCompleted
from app.services.finalizer import parse_float_or_zero, parse_int_or_zero
from app.services.history import HistoryStore

logger = logging.getLogger(__name__)


class SessionController:
    def __init__(
        self,
        history: HistoryStore,
        events: EventBus,
        catalog: TemplateCatalog | None = None,
        clock: Callable[[], datetime] = local_now,
    ) -> None:
        self._history = history
        self._events = events
        self._catalog = catalog
        self._clock = clock
        self._active: ActiveSession | None = None

    @property
    def active(self) -> ActiveSession | None:
        return self._active

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self, template: WorkoutTemplate | None = None, name: str | None = None) -> ActiveSession:
        """
        Begin a session, seeding one empty set per template exercise (none for a
        free session). Any existing session is replaced without confirmation.
        """
        if self._active is not None:
            logger.warning("Replacing active session %s without finishing it", self._active.id)

        exercises = []
        if template is not None:
            exercises = [
                ExerciseInSession(
                    exercise_id=ex.id,
                    name=ex.name,
                    muscle_group=ex.muscle_group,
                    sets=[SetEntry()],
                )
                for ex in template.exercises
            ]
        self._active = ActiveSession(
            name=name or (template.name if template else FREE_SESSION_NAME),
            started_at=self._clock(),
            template_id=template.id if template else None,
            exercises=exercises,
        )
        logger.info("Started session %s (%s)", self._active.id, self._active.name)
        return self._active

    def start_from_template_id(self, template_id: str, name: str | None = None) -> ActiveSession:
        template = self._catalog.get_by_id(template_id) if self._catalog else None
        if template is None:
            raise TemplateNotFoundError(template_id)
        return self.start(template, name=name)

    def cancel(self) -> bool:
        """Discard the session; nothing is recorded."""
        if self._active is None:
            return False
        logger.info("Cancelled session %s", self._active.id)
        self._active = None
        return True

    def take(self) -> ActiveSession | None:
        """Detach and return the session for finalization; it no longer exists here."""
        session, self._active = self._active, None
        return session

    # ------------------------------------------------------------------
    # Exercises
    # ------------------------------------------------------------------

    def add_exercise(
        self,
        ref: ExerciseTemplate | str,
        muscle_group: str = "",
        exercise_id: str | None = None,
    ) -> ExerciseInSession | None:
        """
        Append an exercise with no sets. ``ref`` is a catalog exercise or a bare
        name; a bare name without an explicit id is keyed by its slug, so the
        same name always maps to the same exercise across sessions.
        """
        if self._active is None:
            return None
        if isinstance(ref, ExerciseTemplate):
            exercise = ExerciseInSession(exercise_id=ref.id, name=ref.name, muscle_group=ref.muscle_group)
        else:
            exercise = ExerciseInSession(name=ref, muscle_group=muscle_group)
            # Names with no letters or digits keep the random id
            exercise.exercise_id = exercise_id or exercise_slug(ref) or exercise.exercise_id
        self._active.exercises.append(exercise)
        return exercise

    def remove_exercise(self, exercise_id: str) -> bool:
        if self._active is None:
            return False
        before = len(self._active.exercises)
        self._active.exercises = [e for e in self._active.exercises if e.id != exercise_id]
        return len(self._active.exercises) != before

    def toggle_expand(self, exercise_id: str) -> bool | None:
        exercise = self._exercise(exercise_id)
        if exercise is None:
            return None
        exercise.expanded = not exercise.expanded
        return exercise.expanded

    # ------------------------------------------------------------------
    # Sets
    # ------------------------------------------------------------------

    def add_set(self, exercise_id: str) -> SetEntry | None:
        exercise = self._exercise(exercise_id)
        if exercise is None:
            return None
        entry = SetEntry()
        exercise.sets.append(entry)
        return entry

    def update_set(self, exercise_id: str, set_id: str, field: SetField | str, value: str) -> SetEntry | None:
        """Store raw text; validation waits until the session is finished."""
        field = SetField(field)
        entry = self._set(exercise_id, set_id)
        if entry is None:
            return None
        setattr(entry, field.value, value)
        return entry

    def complete_set(self, exercise_id: str, set_id: str) -> SetAction | None:
        """
        The set's one button: a pending set becomes completed (and the rest
        timer is signalled); pressing it on a completed set deletes the set.
        """
        entry = self._set(exercise_id, set_id)
        if entry is None:
            return None
        if entry.completed:
            self.delete_set(exercise_id, set_id)
            return SetAction.DELETED

        entry.completed = True
        entry.completed_at = self._clock()
        self._events.publish(
            SetCompleted(
                session_id=self._active.id,
                exercise_id=exercise_id,
                set_id=set_id,
                completed_at=entry.completed_at,
            )
        )
        return SetAction.COMPLETED

    def delete_set(self, exercise_id: str, set_id: str) -> bool:
        """Remove a set. Later sets move up; numbers come from position only."""
        exercise = self._exercise(exercise_id)
        if exercise is None:
            return False
        before = len(exercise.sets)
        exercise.sets = [s for s in exercise.sets if s.id != set_id]
        return len(exercise.sets) != before

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def previous_performance(self, exercise_name: str) -> list[CompletedSet] | None:
        """
        Sets from the most recent record with an exercise of exactly this name.
        Matching is by name, so a renamed exercise has no previous performance.
        """
        exercise = self._history.latest_exercise_named(exercise_name)
        return list(exercise.sets) if exercise else None

    def progress(self) -> SessionProgress | None:
        if self._active is None:
            return None
        sets = [s for e in self._active.exercises for s in e.sets]
        completed = [s for s in sets if s.completed]
        return SessionProgress(
            total_sets=len(sets),
            completed_sets=len(completed),
            progress_percentage=(len(completed) / len(sets)) * 100 if sets else 0.0,
            total_volume=sum(parse_float_or_zero(s.weight) * parse_int_or_zero(s.reps) for s in completed),
        )

    def _exercise(self, exercise_id: str) -> ExerciseInSession | None:
        if self._active is None:
            return None
        return self._active.find_exercise(exercise_id)

    def _set(self, exercise_id: str, set_id: str) -> SetEntry | None:
        exercise = self._exercise(exercise_id)
        return exercise.find_set(set_id) if exercise else None
