"""
Pydantic Schemas Package

Request bodies and the JSON envelopes every endpoint responds with.

Schema Naming Convention:
- BookCreate: Fields accepted when creating a book
- BookResponse: A book as it appears inside an envelope
- XxxEnvelope / MessageResponse: The ``{message, data?}`` response shapes
"""

from bookstore.schemas.book import (
    BookCreate,
    BookEnvelope,
    BookListEnvelope,
    BookResponse,
    MessageResponse,
)

__all__ = [
    "BookCreate",
    "BookResponse",
    "MessageResponse",
    "BookEnvelope",
    "BookListEnvelope",
]
