"""Rest timer: a countdown automaton driven by set completions.

IDLE -> RUNNING -> PAUSED | EXPIRED. Ticking is an asyncio task owned by the
timer; it is cancelled on pause, reset, skip, replacement and close. Outside
a running event loop the timer still changes state but does not tick by
itself; callers may drive ``tick()`` directly.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from app.core.constants import MAX_REST_SECONDS, REST_ADJUST_STEP_SECONDS
from app.core.enums import TimerState
from app.schemas.timer import RestTimerSnapshot
from app.services.events import EventBus, SetCompleted

logger = logging.getLogger(__name__)


class RestTimer:
    def __init__(self, default_seconds: int = 90, tick_seconds: float = 1.0) -> None:
        self.default_seconds = default_seconds
        self._tick_seconds = tick_seconds
        self._total = default_seconds
        self._remaining = default_seconds
        self._state = TimerState.IDLE
        self._task: asyncio.Task | None = None
        self._alert_handlers: list[Callable[[], None]] = []
        self._completion_handlers: list[Callable[[], None]] = []

    # ------------------------------------------------------------------
    # Wiring
    # ------------------------------------------------------------------

    def subscribe_to(self, events: EventBus) -> None:
        """Auto-start whenever a set is completed."""
        events.subscribe(SetCompleted, self._on_set_completed)

    def add_alert_handler(self, handler: Callable[[], None]) -> None:
        """One-shot side effect on expiry (e.g. vibrate)."""
        self._alert_handlers.append(handler)

    def add_completion_handler(self, handler: Callable[[], None]) -> None:
        self._completion_handlers.append(handler)

    def _on_set_completed(self, event: SetCompleted) -> None:
        logger.debug("Set %s completed, starting rest timer", event.set_id)
        self.start()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def remaining(self) -> int:
        return self._remaining

    @property
    def total(self) -> int:
        return self._total

    def snapshot(self) -> RestTimerSnapshot:
        return RestTimerSnapshot(
            state=self._state,
            total_seconds=self._total,
            remaining_seconds=self._remaining,
        )

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def start(self, seconds: int | None = None) -> None:
        """(Re)start the countdown. A running countdown is replaced, never stacked."""
        self._cancel_task()
        self._total = self.default_seconds if seconds is None else max(0, seconds)
        self._remaining = self._total
        if self._remaining == 0:
            self._expire()
            return
        self._state = TimerState.RUNNING
        self._schedule()

    def toggle(self) -> None:
        """Pause when running; resume when idle or paused with time left."""
        if self._state is TimerState.RUNNING:
            self._cancel_task()
            self._state = TimerState.PAUSED
        elif self._state in (TimerState.IDLE, TimerState.PAUSED) and self._remaining > 0:
            self._state = TimerState.RUNNING
            self._schedule()

    def reset(self) -> None:
        self._cancel_task()
        self._remaining = self._total
        self._state = TimerState.IDLE

    def adjust(self, delta: int = REST_ADJUST_STEP_SECONDS) -> None:
        self._remaining = max(0, min(MAX_REST_SECONDS, self._remaining + delta))
        if self._remaining == 0 and self._state is TimerState.RUNNING:
            self._expire()

    def skip(self) -> None:
        """Force EXPIRED without the alert or completion callbacks."""
        self._cancel_task()
        self._remaining = 0
        self._state = TimerState.EXPIRED

    def use_preset(self, seconds: int) -> None:
        self._cancel_task()
        self._total = max(0, min(MAX_REST_SECONDS, seconds))
        self._remaining = self._total
        self._state = TimerState.IDLE

    def tick(self) -> None:
        """Advance one second. Only meaningful while RUNNING."""
        if self._state is not TimerState.RUNNING:
            return
        self._remaining = max(0, self._remaining - 1)
        if self._remaining == 0:
            self._expire()

    def close(self) -> None:
        """Teardown: stop ticking. State is left as-is."""
        self._cancel_task()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _expire(self) -> None:
        self._cancel_task()
        self._remaining = 0
        self._state = TimerState.EXPIRED
        logger.info("Rest timer expired")
        for handler in list(self._alert_handlers):
            handler()
        for handler in list(self._completion_handlers):
            handler()

    def _schedule(self) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop; rest timer will not self-tick")
            return
        self._task = loop.create_task(self._run())

    async def _run(self) -> None:
        while self._state is TimerState.RUNNING:
            await asyncio.sleep(self._tick_seconds)
            self.tick()

    def _cancel_task(self) -> None:
        task, self._task = self._task, None
        if task is None or task.done():
            return
        try:
            current = asyncio.current_task()
        except RuntimeError:
            current = None
        if task is not current:
            task.cancel()
