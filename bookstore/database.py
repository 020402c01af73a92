"""
Database Configuration Module

SQLAlchemy 2.0 setup for the Bookstore API.

Nothing here is created at import time. The application factory builds
one engine and one session factory per app and stores the factory on
``app.state``; request handlers receive a session through the ``get_db``
dependency.

Session Management Pattern
==========================
"Session per request":
1. Request arrives -> a new session is opened from the app's factory
2. The handler runs its single database operation and commits
3. On failure the handler rolls back
4. The session is closed when the request ends
"""

import logging
from collections.abc import Generator

from fastapi import Request
from sqlalchemy import Engine, create_engine, text
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from bookstore.config import Settings

logger = logging.getLogger(__name__)


# =============================================================================
# Base Model Class
# =============================================================================
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    ``migrate`` creates every table registered on ``Base.metadata``.
    """
    pass


# =============================================================================
# Engine and Session Factory
# =============================================================================
def create_db_engine(settings: Settings) -> Engine:
    """
    Create the SQLAlchemy engine described by ``settings``.

    PostgreSQL gets a sized connection pool with pre-ping; SQLite needs
    ``check_same_thread=False`` because the server hands requests to a
    thread pool.

    Creating an engine does not open a connection; see ``check_connection``.
    """
    url = settings.sqlalchemy_url

    if url.startswith("sqlite"):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            echo=settings.debug,
        )

    return create_engine(
        url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=True,
        echo=settings.debug,
    )


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    # expire_on_commit=False so committed rows can still be serialized
    return sessionmaker(
        autoflush=False,
        expire_on_commit=False,
        bind=engine,
    )


# =============================================================================
# Startup Helpers
# =============================================================================
def check_connection(engine: Engine) -> None:
    """
    Open a connection and run ``SELECT 1``.

    Raises:
        sqlalchemy.exc.OperationalError: if the database is unreachable
    """
    with engine.connect() as connection:
        connection.execute(text("SELECT 1"))


def migrate(engine: Engine) -> None:
    """
    Create any missing tables.

    This is the only schema management the service performs: tables that
    already exist are left alone.
    """
    # Importing the models registers their tables on Base.metadata
    import bookstore.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Schema migration complete: %s", ", ".join(Base.metadata.tables))


# =============================================================================
# Dependency Injection
# =============================================================================
def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI.

    Opens a session from the factory the application was built with and
    closes it once the response has been produced.

    Usage in Routes:
        @router.get("/books")
        def list_books(db: Session = Depends(get_db)):
            ...

    Yields:
        SQLAlchemy Session instance
    """
    session_factory: sessionmaker[Session] = request.app.state.session_factory
    db = session_factory()
    try:
        yield db
    finally:
        db.close()
