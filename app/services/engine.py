"""Workout engine: wires the session, timer, history, stats and achievements together.

finish(): finalize -> append to history -> recompute stats -> check
achievements -> drop the session -> mirror the record (fire-and-forget).
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Coroutine
from datetime import datetime
from typing import Any

from app.core.config import Settings
from app.core.timeutils import local_now, make_clock
from app.schemas.profile import UserProfile
from app.schemas.stats import WorkoutStats
from app.schemas.workout import WorkoutRecord
from app.services import finalizer, statistics
from app.services.achievements import AchievementEvaluator
from app.services.catalog import TemplateCatalog
from app.services.events import EventBus
from app.services.history import HistoryStore
from app.services.persistence import Persistence
from app.services.rest_timer import RestTimer
from app.services.session_controller import SessionController

logger = logging.getLogger(__name__)


class WorkoutEngine:
    def __init__(
        self,
        profile: UserProfile | None = None,
        catalog: TemplateCatalog | None = None,
        persistence: Persistence | None = None,
        clock: Callable[[], datetime] = local_now,
        week_start_day: int = statistics.SUNDAY,
        date_label_format: str = finalizer.DEFAULT_DATE_LABEL_FORMAT,
        tick_seconds: float = 1.0,
    ) -> None:
        self.profile = profile or UserProfile()
        self.catalog = catalog
        self.persistence = persistence
        self._clock = clock
        self._week_start_day = week_start_day
        self._date_label_format = date_label_format

        self.events = EventBus()
        self.history = HistoryStore()
        self.session = SessionController(self.history, self.events, catalog, clock)
        self.timer = RestTimer(self.profile.default_rest_seconds, tick_seconds)
        self.timer.subscribe_to(self.events)
        self.achievements = AchievementEvaluator(weekly_goal=self.profile.weekly_goal, clock=clock)

        self._stats = statistics.recompute([], clock(), week_start_day)
        self._pending: set[asyncio.Task] = set()

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        catalog: TemplateCatalog | None = None,
        persistence: Persistence | None = None,
    ) -> "WorkoutEngine":
        return cls(
            profile=UserProfile.from_settings(settings),
            catalog=catalog,
            persistence=persistence,
            clock=make_clock(settings.timezone),
            week_start_day=settings.week_start_day,
            date_label_format=settings.date_label_format,
            tick_seconds=settings.rest_tick_seconds,
        )

    @property
    def stats(self) -> WorkoutStats:
        return self._stats

    # ------------------------------------------------------------------
    # Flows
    # ------------------------------------------------------------------

    def finish(self, elapsed_duration: int | None = None) -> WorkoutRecord | None:
        """Finalize the active session. No active session -> nothing happens."""
        session = self.session.active
        if session is None:
            return None

        now = self._clock()
        if elapsed_duration is None:
            elapsed_duration = int((now - session.started_at).total_seconds())
        record = finalizer.finish(session, elapsed_duration, now, self._date_label_format)

        record = self.history.append(record)
        self.refresh()
        self.session.take()
        logger.info(
            "Finished session %s as record %s: %d sets, %.1f volume",
            session.id,
            record.id,
            record.total_sets,
            record.total_volume,
        )

        if self.persistence is not None:
            self._fire_and_forget(self.persistence.save(record), f"save {record.id}")
        return record

    def delete_record(self, record_id: str) -> bool:
        if not self.history.delete(record_id):
            return False
        self.refresh()
        if self.persistence is not None:
            self._fire_and_forget(self.persistence.delete(record_id), f"delete {record_id}")
        return True

    def refresh(self) -> WorkoutStats:
        """Recompute stats from history, then let achievements react."""
        self._stats = statistics.recompute(self.history, self._clock(), self._week_start_day)
        self.achievements.check(self._stats)
        return self._stats

    async def load_from_persistence(self) -> int:
        """Replace local history with the mirror's contents. Returns the record count."""
        if self.persistence is None:
            return len(self.history)
        records = await self.persistence.load_all()
        self.history.load(records)
        self.refresh()
        return len(self.history)

    def reset_all_progress(self) -> None:
        """Drop every history record. Unlocked achievements and points are kept."""
        record_ids = [r.id for r in self.history]
        self.history.clear()
        self.refresh()
        logger.info("Reset progress: removed %d record(s)", len(record_ids))
        if self.persistence is not None:
            for record_id in record_ids:
                self._fire_and_forget(self.persistence.delete(record_id), f"delete {record_id}")

    # ------------------------------------------------------------------
    # Background mirror writes
    # ------------------------------------------------------------------

    def _fire_and_forget(self, coro: Coroutine[Any, Any, None], label: str) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            coro.close()
            logger.warning("No running event loop; skipped persistence %s", label)
            return
        task = loop.create_task(coro, name=f"persistence:{label}")
        self._pending.add(task)
        task.add_done_callback(self._on_mirror_done)

    def _on_mirror_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Persistence %s failed; local state kept", task.get_name(), exc_info=exc)

    async def flush(self) -> None:
        """Wait for outstanding mirror writes (used at shutdown and in tests)."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def close(self) -> None:
        self.timer.close()
