"""
FastAPI Application Entry Point

This module creates and configures the FastAPI application.

Startup Sequence
================
1. Load settings (environment / .env)
2. Build the engine and session factory (no connection yet)
3. Lifespan startup: connect, then run the schema migration
4. Serve requests

A failure in step 1 or step 3 aborts startup: the error is logged and
re-raised, and the server exits without accepting connections.

Run with:
    uvicorn bookstore.main:app --host 0.0.0.0 --port 8080
or:
    python -m bookstore.main
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, status
from fastapi.responses import JSONResponse
from sqlalchemy import Engine
from sqlalchemy.exc import SQLAlchemyError

from bookstore import __version__
from bookstore.config import Settings, get_settings
from bookstore.database import (
    check_connection,
    create_db_engine,
    create_session_factory,
    migrate,
)
from bookstore.dependencies import AppSettings
from bookstore.exceptions import register_exception_handlers
from bookstore.routers import books_router

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


# =============================================================================
# Lifespan Events
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Code before yield runs on startup, code after yield on shutdown.
    """
    settings: Settings = app.state.settings
    engine: Engine = app.state.engine

    # ----- STARTUP -----
    logger.info(f"Starting {settings.app_name}...")
    try:
        check_connection(engine)
    except SQLAlchemyError:
        logger.critical("could not load the database", exc_info=True)
        raise
    try:
        migrate(engine)
    except SQLAlchemyError:
        logger.critical("could not migrate db", exc_info=True)
        raise

    yield  # Application runs here

    # ----- SHUTDOWN -----
    logger.info(f"Shutting down {settings.app_name}...")
    engine.dispose()


# =============================================================================
# Application Factory
# =============================================================================
def create_app(
    settings: Optional[Settings] = None,
    engine: Optional[Engine] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to use; defaults to the cached environment settings
        engine: Pre-built engine (tests inject an in-memory SQLite engine);
            built from ``settings`` when omitted

    Returns:
        Configured FastAPI application instance
    """
    if settings is None:
        settings = get_settings()
    configure_logging(settings)

    if engine is None:
        engine = create_db_engine(settings)

    app = FastAPI(
        title=settings.app_name,
        description="CRUD service over a table of books (author, title, publisher).",
        version=__version__,
        lifespan=lifespan,
    )

    # The database handle lives on the app, not in a module global
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    register_exception_handlers(app)

    app.include_router(books_router, prefix=settings.api_prefix)

    # -------------------------------------------------------------------------
    # Health Check Endpoint
    # -------------------------------------------------------------------------
    @app.get(
        "/health",
        tags=["Health"],
        summary="Health check",
        description="Check that the API is running and the database answers.",
    )
    def health_check(app_settings: AppSettings) -> JSONResponse:
        try:
            check_connection(app.state.engine)
        except SQLAlchemyError as exc:
            logger.error(f"Health check failed: {exc}")
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"status": "unhealthy", "app": app_settings.app_name},
            )
        return JSONResponse(
            content={"status": "healthy", "app": app_settings.app_name},
        )

    return app


# =============================================================================
# Application Instance
# =============================================================================
# This is what uvicorn imports: uvicorn bookstore.main:app

app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "bookstore.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
