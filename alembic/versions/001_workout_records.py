"""Workout record mirror: workout_records, completed_exercises, completed_sets.

Revision ID: 001
Revises:
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "workout_records",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("date_label", sa.String(length=32), nullable=False),
        sa.Column("template_id", sa.String(length=64), nullable=True),
        sa.Column("template_name", sa.String(length=255), nullable=True),
        sa.Column("duration", sa.Integer(), nullable=True),
        sa.Column("total_volume", sa.Float(), nullable=True),
        sa.Column("total_sets", sa.Integer(), nullable=True),
        sa.Column("total_reps", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_workout_records_created_at", "workout_records", ["created_at"], unique=False)

    op.create_table(
        "completed_exercises",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("record_id", sa.String(length=64), nullable=False),
        sa.Column("position", sa.Integer(), nullable=True),
        sa.Column("exercise_id", sa.String(length=64), nullable=False),
        sa.Column("exercise_name", sa.String(length=255), nullable=False),
        sa.Column("muscle_group", sa.String(length=100), nullable=True),
        sa.Column("total_volume", sa.Float(), nullable=True),
        sa.ForeignKeyConstraint(["record_id"], ["workout_records.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_completed_exercises_record_id", "completed_exercises", ["record_id"], unique=False)
    op.create_index(op.f("ix_completed_exercises_exercise_id"), "completed_exercises", ["exercise_id"], unique=False)

    op.create_table(
        "completed_sets",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("exercise_row_id", sa.Integer(), nullable=False),
        sa.Column("set_number", sa.Integer(), nullable=False),
        sa.Column("weight", sa.Float(), nullable=True),
        sa.Column("reps", sa.Integer(), nullable=True),
        sa.Column("is_completed", sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(["exercise_row_id"], ["completed_exercises.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_completed_sets_exercise_row_id"), "completed_sets", ["exercise_row_id"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_completed_sets_exercise_row_id"), table_name="completed_sets")
    op.drop_table("completed_sets")
    op.drop_index(op.f("ix_completed_exercises_exercise_id"), table_name="completed_exercises")
    op.drop_index("ix_completed_exercises_record_id", table_name="completed_exercises")
    op.drop_table("completed_exercises")
    op.drop_index("ix_workout_records_created_at", table_name="workout_records")
    op.drop_table("workout_records")
