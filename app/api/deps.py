"""FastAPI dependencies shared by the v1 endpoints."""

from fastapi import HTTPException, Request

from app.schemas.session import ActiveSession
from app.services.engine import WorkoutEngine


def get_engine(request: Request) -> WorkoutEngine:
    """The engine instance owned by the running application."""
    return request.app.state.engine


def require_active_session(engine: WorkoutEngine) -> ActiveSession:
    session = engine.session.active
    if session is None:
        raise HTTPException(status_code=409, detail="No active session")
    return session
