"""Active session schemas: the in-progress workout, its exercises and raw set entries."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from app.core.enums import SetAction, SetField


def new_id() -> str:
    return str(uuid.uuid4())


class SetEntry(BaseModel):
    """One attempt. Weight/reps stay raw text until the session is finalized."""

    id: str = Field(default_factory=new_id)
    weight: str = ""
    reps: str = ""
    completed: bool = False
    completed_at: datetime | None = None


class ExerciseInSession(BaseModel):
    """Exercise being performed; set order defines the displayed set number."""

    id: str = Field(default_factory=new_id)
    exercise_id: str = Field(default_factory=new_id)
    name: str
    muscle_group: str = ""
    expanded: bool = True
    sets: list[SetEntry] = []

    def find_set(self, set_id: str) -> SetEntry | None:
        return next((s for s in self.sets if s.id == set_id), None)


class ActiveSession(BaseModel):
    id: str = Field(default_factory=new_id)
    name: str
    started_at: datetime
    template_id: str | None = None
    exercises: list[ExerciseInSession] = []

    def find_exercise(self, exercise_id: str) -> ExerciseInSession | None:
        return next((e for e in self.exercises if e.id == exercise_id), None)


class SessionProgress(BaseModel):
    """Live summary of the active session (completed sets only count toward volume)."""

    total_sets: int = 0
    completed_sets: int = 0
    progress_percentage: float = 0.0
    total_volume: float = 0.0


# --- API payloads -------------------------------------------------------------


class SetEntryRead(SetEntry):
    set_number: int


class ExerciseInSessionRead(BaseModel):
    id: str
    exercise_id: str
    name: str
    muscle_group: str
    expanded: bool
    sets: list[SetEntryRead] = []


class ActiveSessionRead(BaseModel):
    """Snapshot for rendering the in-progress workout."""

    id: str
    name: str
    started_at: datetime
    template_id: str | None = None
    exercises: list[ExerciseInSessionRead] = []

    @classmethod
    def from_session(cls, session: ActiveSession) -> "ActiveSessionRead":
        return cls(
            id=session.id,
            name=session.name,
            started_at=session.started_at,
            template_id=session.template_id,
            exercises=[
                ExerciseInSessionRead(
                    id=e.id,
                    exercise_id=e.exercise_id,
                    name=e.name,
                    muscle_group=e.muscle_group,
                    expanded=e.expanded,
                    sets=[
                        SetEntryRead(**s.model_dump(), set_number=i + 1)
                        for i, s in enumerate(e.sets)
                    ],
                )
                for e in session.exercises
            ],
        )


class SessionStart(BaseModel):
    template_id: str | None = None
    name: str | None = Field(None, min_length=1, max_length=255)


class ExerciseAdd(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    muscle_group: str = ""
    exercise_id: str | None = None


class SetUpdate(BaseModel):
    field: SetField
    value: str = Field("", max_length=32)


class SetActionRead(BaseModel):
    action: SetAction | None = None
    session: ActiveSessionRead | None = None


class SessionFinish(BaseModel):
    duration_seconds: int | None = Field(None, ge=0)


class GhostSet(BaseModel):
    """Previous session's weight/reps shown as a placeholder hint."""

    set_number: int
    weight: float
    reps: int
