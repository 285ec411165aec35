"""FastAPI application for the FitSpark API."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from .. import __version__
from ..clients.coach import Coach
from ..config import Settings, get_settings
from ..db.engine import get_db_path, init_db, seed_videos
from ..errors import (
    AuthError,
    CoachError,
    ConflictError,
    FitSparkError,
    NotFoundError,
    PermissionDenied,
)
from ..logger import setup_logging
from .deps import AppServices
from .routers import admin, auth, progress, users, videos, workouts

logger = logging.getLogger(__name__)

# Built single-page app, served when present
STATIC_DIR = Path(__file__).parent / "static"

ERROR_STATUS = {
    NotFoundError: 404,
    ConflictError: 409,
    AuthError: 401,
    PermissionDenied: 403,
    CoachError: 502,
}


def create_app(settings: Settings | None = None, coach: Coach | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Overrides the environment settings (tests pass a temp data dir).
        coach: Overrides the OpenAI-backed coach.
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_file)
    db_path = get_db_path(settings.data_dir)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if not db_path.exists():
            await init_db(db_path)
            await seed_videos(db_path)
        logger.info("FitSpark API ready (database %s)", db_path)
        yield

    app = FastAPI(
        title="FitSpark",
        description="Guided 30-day fitness programs with progress tracking and achievements",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.services = AppServices.build(settings, db_path, coach=coach)

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.exception_handler(FitSparkError)
    async def handle_app_error(request: Request, exc: FitSparkError):
        status = next(
            (code for error_type, code in ERROR_STATUS.items() if isinstance(exc, error_type)),
            500,
        )
        if status >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=status, content={"detail": str(exc)})

    @app.exception_handler(ValueError)
    async def handle_invalid_value(request: Request, exc: ValueError):
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(progress.router)
    app.include_router(workouts.router)
    app.include_router(videos.router)
    app.include_router(admin.router)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    if STATIC_DIR.exists():
        app.mount("/", StaticFiles(directory=STATIC_DIR, html=True), name="static")

    return app
