"""
Books Router

The four book endpoints:

    POST    /create_books         create a book from a JSON body
    DELETE  /delete_book/{id}     hard-delete a book by id
    GET     /get_books/{id}       fetch one book
    GET     /books                list every book

Each handler performs exactly one database operation on the request's
session. Successful responses use the ``{message, data?}`` envelope;
failures raise a ``BookstoreError`` that ``bookstore.exceptions`` renders.

The ``{book_id:path}`` templates also match an empty id (``/get_books/``),
so the empty-id check below is reachable.
"""

import logging

from fastapi import APIRouter
from sqlalchemy import delete, select
from sqlalchemy.exc import NoResultFound, SQLAlchemyError

from bookstore.dependencies import DbSession
from bookstore.exceptions import (
    BookNotFoundError,
    DatabaseOperationError,
    InvalidIdError,
    MalformedIdError,
)
from bookstore.models import Book
from bookstore.schemas import (
    BookCreate,
    BookEnvelope,
    BookListEnvelope,
    BookResponse,
    MessageResponse,
)

logger = logging.getLogger(__name__)

# Range of a 64-bit signed primary key
MIN_BOOK_ID = -(2**63)
MAX_BOOK_ID = 2**63 - 1

router = APIRouter(
    tags=["Books"],
    responses={
        400: {"model": MessageResponse, "description": "Database operation failed"},
        500: {"model": MessageResponse, "description": "Empty id"},
    },
)


# =============================================================================
# Helper Functions
# =============================================================================
def parse_book_id(book_id: str, failure_message: str) -> int:
    """
    Turn the raw ``id`` path segment into a primary key.

    Negative values are valid integers; they just never match a row.

    Args:
        book_id: Path segment as received
        failure_message: Message to report when the id cannot name a row

    Raises:
        InvalidIdError: if the id is empty
        MalformedIdError: if the id is not an integer that fits in a
            64-bit key
    """
    if book_id == "":
        raise InvalidIdError("id cannot be empty")

    try:
        pk = int(book_id)
    except ValueError as exc:
        raise MalformedIdError(failure_message) from exc

    if not MIN_BOOK_ID <= pk <= MAX_BOOK_ID:
        raise MalformedIdError(failure_message)
    return pk


# =============================================================================
# Endpoints
# =============================================================================
@router.post(
    "/create_books",
    response_model=MessageResponse,
    summary="Create a book",
    responses={422: {"model": MessageResponse, "description": "Malformed body"}},
)
def create_books(book_data: BookCreate, db: DbSession) -> MessageResponse:
    """
    Insert one book.

    The generated id is not returned; clients find it through the list
    endpoint.
    """
    book = Book(**book_data.model_dump())

    try:
        db.add(book)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise DatabaseOperationError("could not create book") from exc

    logger.info("Created book id=%s", book.id)
    return MessageResponse(message="book has been created")


@router.delete(
    "/delete_book/{book_id:path}",
    response_model=MessageResponse,
    summary="Delete a book",
)
def delete_book(book_id: str, db: DbSession) -> MessageResponse:
    """
    Hard-delete the book with the given id.

    Existence is not checked first: deleting an id with no row still
    succeeds.
    """
    pk = parse_book_id(book_id, "could not delete book")

    try:
        result = db.execute(delete(Book).where(Book.id == pk))
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise DatabaseOperationError("could not delete book") from exc

    logger.info("Deleted book id=%s (rows affected: %s)", pk, result.rowcount)
    return MessageResponse(message="book deleted successfully")


@router.get(
    "/get_books/{book_id:path}",
    response_model=BookEnvelope,
    summary="Get a book by id",
)
def get_book_by_id(book_id: str, db: DbSession) -> BookEnvelope:
    pk = parse_book_id(book_id, "cannot get id")
    logger.debug("Fetching book id=%s", pk)

    try:
        book = db.execute(select(Book).where(Book.id == pk)).scalar_one()
    except NoResultFound as exc:
        raise BookNotFoundError("cannot get id") from exc
    except SQLAlchemyError as exc:
        db.rollback()
        raise DatabaseOperationError("cannot get id") from exc

    return BookEnvelope(
        message="book id has been found",
        data=BookResponse.model_validate(book),
    )


@router.get(
    "/books",
    response_model=BookListEnvelope,
    summary="List all books",
)
def get_books(db: DbSession) -> BookListEnvelope:
    """
    Return every book.

    No filtering, no pagination, and no ordering beyond what the
    database returns by default.
    """
    try:
        books = db.execute(select(Book)).scalars().all()
    except SQLAlchemyError as exc:
        db.rollback()
        raise DatabaseOperationError("could not find book") from exc

    return BookListEnvelope(
        message="book has been found",
        data=[BookResponse.model_validate(book) for book in books],
    )
