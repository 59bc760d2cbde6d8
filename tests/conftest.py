"""Shared test fixtures: a controllable clock, the template catalog and engine pieces."""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from app.services.catalog import DEFAULT_TEMPLATES, InMemoryTemplateCatalog
from app.services.engine import WorkoutEngine
from app.services.events import EventBus
from app.services.history import HistoryStore
from app.services.session_controller import SessionController
from tests.factories import NOW


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(NOW)


@pytest.fixture
def catalog() -> InMemoryTemplateCatalog:
    return InMemoryTemplateCatalog(DEFAULT_TEMPLATES)


@pytest.fixture
def history() -> HistoryStore:
    return HistoryStore()


@pytest.fixture
def events() -> EventBus:
    return EventBus()


@pytest.fixture
def controller(history, events, catalog, clock) -> SessionController:
    return SessionController(history, events, catalog, clock)


@pytest.fixture
def engine(catalog, clock):
    workout_engine = WorkoutEngine(catalog=catalog, clock=clock)
    yield workout_engine
    workout_engine.close()
