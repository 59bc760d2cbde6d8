"""Health check endpoint for load balancers and monitoring."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.db.session import get_db

router = APIRouter()


@router.get("")
async def health():
    """Liveness check."""
    settings = get_settings()
    return {"status": "ok", "service": settings.app_name, "persistence": settings.persistence_enabled}


@router.get("/ready")
async def readiness(db: AsyncSession = Depends(get_db)):
    """Readiness: app + persistence mirror connectivity (when the mirror is enabled)."""
    if not get_settings().persistence_enabled:
        return {"status": "ok", "database": "disabled"}
    try:
        await db.execute(text("SELECT 1"))
        return {"status": "ok", "database": "connected"}
    except Exception as e:
        return JSONResponse(
            status_code=500,
            content={"status": "error", "database": str(e)},
        )
