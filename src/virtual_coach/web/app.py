"""FastAPI application for the virtual-coach JSON API."""

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import load_settings
from ..data.catalog import ExerciseCache, ExerciseCatalog
from ..db import ExerciseRepository
from ..db.engine import get_db_path, init_db, seed_exercises
from ..errors import VirtualCoachError
from .routers import exercises, logs, plans, sessions
from .session_tracker import PlanStore, SessionTracker


def create_app(db_path: Path | None = None, data_dir: Path | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        db_path: SQLite file. Defaults to the configured data directory.
        data_dir: Directory for guest logs. Defaults to the configured one.
    """
    settings = load_settings()
    data_dir = data_dir or settings.data_dir
    db_path = db_path or get_db_path(data_dir)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Create the schema and seed the catalog on first start."""
        if not db_path.exists():
            await init_db(db_path)
            await seed_exercises(db_path)
        yield

    app = FastAPI(
        title="virtual-coach",
        description="Workout plan generator and training player",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.db_path = db_path
    app.state.data_dir = data_dir
    app.state.catalog = ExerciseCatalog(
        ExerciseRepository(db_path), ExerciseCache(settings.catalog_ttl_seconds)
    )
    app.state.plans = PlanStore()
    app.state.sessions = SessionTracker()

    app.include_router(exercises.router)
    app.include_router(plans.router)
    app.include_router(sessions.router)
    app.include_router(logs.router)

    @app.exception_handler(VirtualCoachError)
    async def virtual_coach_error(request: Request, exc: VirtualCoachError):
        return JSONResponse(status_code=422, content={"error": str(exc)})

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    return app

