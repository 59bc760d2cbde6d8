"""Declarative base for the workout record mirror tables."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base for mirror ORM rows (see app.models)."""
