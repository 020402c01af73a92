"""
pytest Fixtures for Bookstore API Tests

Each test gets its own in-memory SQLite engine. The application is built
with that engine injected, so the lifespan startup (connection check and
schema migration) runs against it exactly as it would against PostgreSQL.

FIXTURE SCOPES:
- engine: function (fresh database per test)
- client: function (app started through its lifespan)
- db_session: function (direct access for arranging and asserting)
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# Set before importing the app: bookstore.main builds a module-level app
# from the environment on import.
import os

os.environ["DATABASE_URL"] = "sqlite://"

from collections.abc import Callable, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from bookstore.config import Settings
from bookstore.main import create_app
from bookstore.models import Book


# =============================================================================
# DATABASE FIXTURES
# =============================================================================
@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    """
    SQLite in-memory engine.

    StaticPool keeps a single connection alive; without it every new
    connection would see a different, empty in-memory database.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


@pytest.fixture
def settings() -> Settings:
    """Settings with the historical status codes."""
    return Settings(_env_file=None, database_url="sqlite://")


@pytest.fixture
def make_client(engine: Engine) -> Generator[Callable[[Settings], TestClient], None, None]:
    """
    Factory for started test clients.

    Tests that need non-default settings (strict status codes) call the
    factory themselves; everything else uses ``client``.
    """
    clients: list[TestClient] = []

    def _make(settings: Settings) -> TestClient:
        app = create_app(settings=settings, engine=engine)
        test_client = TestClient(app)
        test_client.__enter__()
        clients.append(test_client)
        return test_client

    yield _make

    for test_client in reversed(clients):
        test_client.__exit__(None, None, None)


@pytest.fixture
def client(make_client, settings: Settings) -> TestClient:
    """Test client running the app with legacy status codes."""
    return make_client(settings)


@pytest.fixture
def strict_client(make_client) -> TestClient:
    """Test client running the app with strict status codes."""
    return make_client(
        Settings(_env_file=None, database_url="sqlite://", legacy_status_codes=False)
    )


@pytest.fixture
def db_session(client: TestClient, engine: Engine) -> Generator[Session, None, None]:
    """
    Session on the test database, for arranging data and checking rows.

    Depends on ``client`` so the tables exist and so the session is closed
    before the app shuts down.
    """
    session = sessionmaker(bind=engine)()
    yield session
    session.close()


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================
@pytest.fixture
def sample_book(db_session: Session) -> Book:
    book = Book(
        author="George Orwell",
        title="1984",
        publisher="Secker & Warburg",
    )
    db_session.add(book)
    db_session.commit()
    db_session.refresh(book)
    return book


@pytest.fixture
def multiple_books(db_session: Session) -> list[Book]:
    """Five books, two of them exact duplicates."""
    books = [
        Book(author=f"Author {i}", title=f"Title {i}", publisher=f"Publisher {i}")
        for i in range(3)
    ]
    books += [
        Book(author="Same", title="Same", publisher="Same"),
        Book(author="Same", title="Same", publisher="Same"),
    ]
    db_session.add_all(books)
    db_session.commit()
    for book in books:
        db_session.refresh(book)
    return books


@pytest.fixture
def rollback_calls(monkeypatch) -> list[Session]:
    """
    Record every ``Session.rollback`` call.

    Each entry is the session that was rolled back.
    """
    calls: list[Session] = []
    original = Session.rollback

    def recording_rollback(self: Session) -> None:
        calls.append(self)
        original(self)

    monkeypatch.setattr(Session, "rollback", recording_rollback)
    return calls
