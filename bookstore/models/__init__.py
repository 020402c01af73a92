"""
SQLAlchemy Models Package

Importing this package registers every table on ``Base.metadata``,
which is what ``bookstore.database.migrate`` creates.
"""

from bookstore.models.book import Book

__all__ = [
    "Book",
]
