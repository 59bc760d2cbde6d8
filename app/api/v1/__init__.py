"""API v1 router aggregation."""

from fastapi import APIRouter

from app.api.v1.endpoints import (
    achievements,
    health,
    history,
    session,
    stats,
    timer,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(session.router, prefix="/session", tags=["session"])
api_router.include_router(timer.router, prefix="/timer", tags=["timer"])
api_router.include_router(history.router, prefix="/history", tags=["history"])
api_router.include_router(stats.router, prefix="/stats", tags=["stats"])
api_router.include_router(achievements.router, prefix="/achievements", tags=["achievements"])
