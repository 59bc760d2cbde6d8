"""History store: most-recent-first log of finalized workout records."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable, Iterator
from datetime import datetime

from app.core.constants import RECENT_WORKOUTS_LIMIT
from app.core.timeutils import align
from app.schemas.workout import CompletedExercise, WorkoutRecord

logger = logging.getLogger(__name__)


def _sort_key(record: WorkoutRecord) -> tuple[datetime, str]:
    return record.created_at, record.id or ""


class HistoryStore:
    """
    Ordered log of records, newest at index 0.
    Order is kept by construction (head insert); ``load`` re-sorts anything
    coming from outside so "most recent first" holds for every reader.
    """

    def __init__(self, records: Iterable[WorkoutRecord] = ()) -> None:
        self._records: list[WorkoutRecord] = []
        if records:
            self.load(records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[WorkoutRecord]:
        return iter(list(self._records))

    @property
    def records(self) -> tuple[WorkoutRecord, ...]:
        return tuple(self._records)

    def append(self, record: WorkoutRecord) -> WorkoutRecord:
        """Insert at head; assign a stable id unless the record already carries one."""
        if record.id is None:
            record = record.model_copy(update={"id": str(uuid.uuid4())})
        self._records.insert(0, record)
        logger.debug("Appended workout record %s", record.id)
        return record

    def delete(self, record_id: str) -> bool:
        for index, record in enumerate(self._records):
            if record.id == record_id:
                del self._records[index]
                logger.info("Deleted workout record %s", record_id)
                return True
        return False

    def find_by_id(self, record_id: str) -> WorkoutRecord | None:
        return next((r for r in self._records if r.id == record_id), None)

    def query_by_date_range(self, start: datetime, end: datetime) -> list[WorkoutRecord]:
        """
        Records with ``start <= created_at <= end`` (both ends inclusive), newest first.
        Naive bounds are wall-clock times in each record's own zone.
        """
        return [
            r
            for r in self._records
            if align(start, r.created_at) <= r.created_at <= align(end, r.created_at)
        ]

    def recent(self, limit: int = RECENT_WORKOUTS_LIMIT) -> list[WorkoutRecord]:
        return self._records[:limit]

    def exercise_history(self, exercise_id: str) -> list[CompletedExercise]:
        """Every logged entry of ``exercise_id``, newest first."""
        return [e for r in self._records for e in r.exercises if e.exercise_id == exercise_id]

    def latest_exercise_named(self, name: str) -> CompletedExercise | None:
        """Most recent entry whose name matches exactly and has at least one set."""
        for record in self._records:
            for exercise in record.exercises:
                if exercise.exercise_name == name and exercise.sets:
                    return exercise
        return None

    def load(self, records: Iterable[WorkoutRecord]) -> None:
        """Replace contents, de-duplicating by id (last occurrence wins) and re-sorting newest first."""
        by_id: dict[str, WorkoutRecord] = {}
        for record in records:
            if record.id is None:
                record = record.model_copy(update={"id": str(uuid.uuid4())})
            by_id[record.id] = record
        self._records = sorted(by_id.values(), key=_sort_key, reverse=True)
        logger.info("Loaded %d workout record(s)", len(self._records))

    def clear(self) -> None:
        self._records.clear()
