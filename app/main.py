"""
Main FastAPI application entry point.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from app import __version__
from app.config import Settings, get_settings
from app.exceptions import AppError
from app.services.lifecycle import SessionLifecycle
from app.services.reaper import SessionReaper
from app.services.store import SessionStore, UserRegistry
from app.services.sync import PlaybackSync
from app.websocket.broadcast import notify_members
from app.websocket.manager import ConnectionManager

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan handler.
    Starts the idle-session reaper on startup and stops it on shutdown.
    """
    settings: Settings = app.state.settings
    logger.info("Starting %s v%s", settings.app_name, __version__)

    reaper: SessionReaper = app.state.reaper
    if settings.reaper_enabled:
        reaper.start()

    yield

    await reaper.stop()
    logger.info("%s shutdown complete", settings.app_name)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        description="Synchronized playback sessions for watch parties",
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
        openapi_url="/api/openapi.json" if settings.debug else None,
    )

    # One set of stores per application instance
    sessions = SessionStore()
    users = UserRegistry()
    lifecycle = SessionLifecycle(sessions, users)
    sync = PlaybackSync(sessions, users, notify=notify_members)

    app.state.settings = settings
    app.state.sessions = sessions
    app.state.users = users
    app.state.connections = ConnectionManager(users, lifecycle, sync)
    app.state.reaper = SessionReaper(
        sessions,
        interval=settings.reaper_interval,
        idle_timeout=settings.session_idle_timeout,
    )

    # Include routers
    from app.routers import health, sessions as sessions_router
    from app.websocket import router as websocket_router

    app.include_router(health.router, tags=["Health"])
    app.include_router(sessions_router.router, tags=["Sessions"])
    app.include_router(websocket_router)

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        """Legacy clients expect plain-text error bodies."""
        return PlainTextResponse(exc.message, status_code=exc.status_code)

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle uncaught exceptions."""
        logger.exception("Unhandled exception: %s", exc)
        return JSONResponse(
            status_code=500,
            content={"error": str(exc)},
        )

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.debug,
    )
