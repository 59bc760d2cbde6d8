"""Database package: async engine and session factory for the persistence mirror."""

from app.db.session import async_session_maker, engine, get_db

__all__ = ["async_session_maker", "engine", "get_db"]
