"""Persistence mirror for workout records.

The engine treats this as best-effort: writes are fired and forgotten, and a
failed write never rolls back local history. Loading is de-duplicated by id
in the history store.
"""

from __future__ import annotations

import logging
from typing import Protocol

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from app.models.workout import CompletedExerciseRow, CompletedSetRow, WorkoutRecordRow
from app.schemas.workout import CompletedExercise, CompletedSet, WorkoutRecord

logger = logging.getLogger(__name__)


class Persistence(Protocol):
    """Remote store of finished records."""

    async def save(self, record: WorkoutRecord) -> None:
        ...

    async def load_all(self) -> list[WorkoutRecord]:
        ...

    async def delete(self, record_id: str) -> None:
        ...


def record_to_row(record: WorkoutRecord) -> WorkoutRecordRow:
    return WorkoutRecordRow(
        id=record.id,
        date_label=record.date_label,
        template_id=record.template_id,
        template_name=record.template_name,
        duration=record.duration,
        total_volume=record.total_volume,
        total_sets=record.total_sets,
        total_reps=record.total_reps,
        created_at=record.created_at,
        exercises=[
            CompletedExerciseRow(
                position=position,
                exercise_id=exercise.exercise_id,
                exercise_name=exercise.exercise_name,
                muscle_group=exercise.muscle_group,
                total_volume=exercise.total_volume,
                sets=[
                    CompletedSetRow(
                        set_number=s.set_number,
                        weight=s.weight,
                        reps=s.reps,
                        is_completed=s.is_completed,
                    )
                    for s in exercise.sets
                ],
            )
            for position, exercise in enumerate(record.exercises)
        ],
    )


def row_to_record(row: WorkoutRecordRow) -> WorkoutRecord:
    return WorkoutRecord(
        id=row.id,
        date_label=row.date_label,
        template_id=row.template_id,
        template_name=row.template_name,
        duration=int(row.duration or 0),
        total_volume=float(row.total_volume or 0),
        total_sets=int(row.total_sets or 0),
        total_reps=int(row.total_reps or 0),
        created_at=row.created_at,
        exercises=tuple(
            CompletedExercise(
                exercise_id=e.exercise_id,
                exercise_name=e.exercise_name,
                muscle_group=e.muscle_group or "",
                total_volume=float(e.total_volume or 0),
                sets=tuple(
                    CompletedSet(
                        set_number=s.set_number,
                        weight=float(s.weight or 0),
                        reps=int(s.reps or 0),
                        is_completed=bool(s.is_completed),
                    )
                    for s in sorted(e.sets, key=lambda s: s.set_number)
                ),
            )
            for e in sorted(row.exercises, key=lambda e: e.position)
        ),
    )


class SqlAlchemyPersistence:
    """Mirror backed by the async SQLAlchemy session factory."""

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]) -> None:
        self._session_maker = session_maker

    async def save(self, record: WorkoutRecord) -> None:
        if record.id is None:
            raise ValueError("Cannot persist a record without an id")
        async with self._session_maker() as db:
            # Records are immutable, so an existing row is already up to date
            if await db.get(WorkoutRecordRow, record.id) is not None:
                return
            db.add(record_to_row(record))
            await db.commit()
        logger.debug("Mirrored workout record %s", record.id)

    async def load_all(self) -> list[WorkoutRecord]:
        async with self._session_maker() as db:
            result = await db.execute(
                select(WorkoutRecordRow)
                .options(selectinload(WorkoutRecordRow.exercises).selectinload(CompletedExerciseRow.sets))
                .order_by(WorkoutRecordRow.created_at.desc())
            )
            return [row_to_record(row) for row in result.scalars().all()]

    async def delete(self, record_id: str) -> None:
        async with self._session_maker() as db:
            await db.execute(delete(WorkoutRecordRow).where(WorkoutRecordRow.id == record_id))
            await db.commit()
