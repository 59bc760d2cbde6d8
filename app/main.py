"""FastAPI application factory and lifespan."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1 import api_router
from app.core.config import get_settings
from app.db.session import async_session_maker, engine as db_engine
from app.services.catalog import DEFAULT_TEMPLATES, InMemoryTemplateCatalog
from app.services.engine import WorkoutEngine
from app.services.persistence import SqlAlchemyPersistence

settings = get_settings()
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def build_engine() -> WorkoutEngine:
    persistence = SqlAlchemyPersistence(async_session_maker) if settings.persistence_enabled else None
    return WorkoutEngine.from_settings(
        settings,
        catalog=InMemoryTemplateCatalog(DEFAULT_TEMPLATES),
        persistence=persistence,
    )


def create_application(workout_engine: WorkoutEngine | None = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup: build the engine and load history; shutdown: drain mirror writes."""
        owned = workout_engine or build_engine()
        app.state.engine = owned
        if owned.persistence is not None:
            try:
                count = await owned.load_from_persistence()
                logger.info("Loaded %d workout record(s) from persistence", count)
            except Exception:
                logger.exception("Could not load history from persistence; starting empty")
        yield
        await owned.flush()
        owned.close()
        await db_engine.dispose()

    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    # CORS: allow localhost in dev; in production use CORS_ORIGINS env (comma-separated)
    if settings.debug:
        cors_origins = ["*"]
    elif settings.environment == "development":
        cors_origins = ["http://localhost:3000", "http://127.0.0.1:3000"]
    else:
        cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    def root():
        return {"status": "ok", "message": settings.app_name}

    app.include_router(api_router, prefix=settings.api_v1_prefix)
    return app


app = create_application()
