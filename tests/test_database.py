"""
Tests for the storage helpers in bookstore.database.
"""

import pytest
from sqlalchemy import inspect
from sqlalchemy.exc import OperationalError

from bookstore.config import Settings
from bookstore.database import (
    check_connection,
    create_db_engine,
    create_session_factory,
    migrate,
)
from bookstore.models import Book


def test_migrate_creates_books_table(engine):
    migrate(engine)

    columns = {c["name"] for c in inspect(engine).get_columns("books")}
    assert columns == {"id", "author", "title", "publisher", "created_at", "updated_at"}


def test_migrate_is_idempotent(engine):
    migrate(engine)
    session = create_session_factory(engine)()
    session.add(Book(author="A", title="T", publisher="P"))
    session.commit()
    session.close()

    migrate(engine)

    session = create_session_factory(engine)()
    assert session.query(Book).count() == 1
    session.close()


def test_ids_are_assigned_on_insert(engine):
    migrate(engine)
    session = create_session_factory(engine)()

    first = Book(author="A", title="T", publisher="P")
    second = Book(author="A", title="T", publisher="P")
    session.add_all([first, second])
    session.commit()

    assert first.id is not None
    assert second.id is not None
    assert first.id != second.id
    assert first.created_at is not None
    session.close()


def test_check_connection_ok(engine):
    check_connection(engine)


def test_check_connection_unreachable(tmp_path):
    missing = tmp_path / "no-such-dir" / "books.db"
    engine = create_db_engine(Settings(_env_file=None, database_url=f"sqlite:///{missing}"))

    with pytest.raises(OperationalError):
        check_connection(engine)


def test_create_sqlite_engine():
    engine = create_db_engine(Settings(_env_file=None, database_url="sqlite://"))

    assert engine.dialect.name == "sqlite"


def test_create_postgres_engine(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    settings = Settings(_env_file=None, db_pool_size=3, db_max_overflow=2)

    engine = create_db_engine(settings)

    assert engine.dialect.name == "postgresql"
    assert engine.pool.size() == 3
    assert engine.url.query["sslmode"] == "disable"
