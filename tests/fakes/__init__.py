"""
In-memory fakes for the engine's ports.

Usage:
    from tests.fakes import FakePersistence

    mirror = FakePersistence()
    mirror.seed([record])
    engine = WorkoutEngine(persistence=mirror)
"""
from tests.fakes.persistence import FailingPersistence, FakePersistence

__all__ = ["FailingPersistence", "FakePersistence"]
