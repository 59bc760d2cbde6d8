"""Workout record mirror tables: records, their exercises and sets."""

from __future__ import annotations

from datetime import datetime, timezone
from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Index, Integer, String

from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


class WorkoutRecordRow(Base):
    """A finished workout as mirrored remotely. Rows are written once and only ever deleted."""

    __tablename__ = "workout_records"
    __table_args__ = (Index("ix_workout_records_created_at", "created_at"),)

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    date_label: Mapped[str] = mapped_column(String(32), nullable=False)
    template_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    template_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    duration: Mapped[int] = mapped_column(Integer, default=0)  # seconds
    total_volume: Mapped[float] = mapped_column(Float, default=0)
    total_sets: Mapped[int] = mapped_column(Integer, default=0)
    total_reps: Mapped[int] = mapped_column(Integer, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    exercises: Mapped[list["CompletedExerciseRow"]] = relationship(
        "CompletedExerciseRow",
        back_populates="record",
        cascade="all, delete-orphan",
        order_by="CompletedExerciseRow.position",
    )


class CompletedExerciseRow(Base):
    __tablename__ = "completed_exercises"
    __table_args__ = (Index("ix_completed_exercises_record_id", "record_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    record_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("workout_records.id", ondelete="CASCADE"), nullable=False
    )
    position: Mapped[int] = mapped_column(Integer, default=0)
    exercise_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    exercise_name: Mapped[str] = mapped_column(String(255), nullable=False)
    muscle_group: Mapped[str] = mapped_column(String(100), default="")
    total_volume: Mapped[float] = mapped_column(Float, default=0)

    record: Mapped["WorkoutRecordRow"] = relationship("WorkoutRecordRow", back_populates="exercises")
    sets: Mapped[list["CompletedSetRow"]] = relationship(
        "CompletedSetRow",
        back_populates="exercise",
        cascade="all, delete-orphan",
        order_by="CompletedSetRow.set_number",
    )


class CompletedSetRow(Base):
    """One set, kept whether or not it was completed."""

    __tablename__ = "completed_sets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    exercise_row_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("completed_exercises.id", ondelete="CASCADE"), nullable=False, index=True
    )
    set_number: Mapped[int] = mapped_column(Integer, nullable=False)
    weight: Mapped[float] = mapped_column(Float, default=0)
    reps: Mapped[int] = mapped_column(Integer, default=0)
    is_completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    exercise: Mapped["CompletedExerciseRow"] = relationship("CompletedExerciseRow", back_populates="sets")
