"""
Book Pydantic Schemas

Fields are deliberately loose: any string (including an empty one) is
accepted for author, title and publisher. A missing key or an explicit
``null`` becomes ``""``. A body that is not JSON, is not an object, or
carries a non-string value for one of those fields fails validation.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BookCreate(BaseModel):
    """
    Schema for creating a new book.

    Unknown keys, ``id`` included, are ignored: the database assigns ids.

    Example request body:
    {
        "author": "George Orwell",
        "title": "1984",
        "publisher": "Secker & Warburg"
    }
    """

    author: str = Field(
        default="",
        description="Book author",
        examples=["George Orwell"],
    )

    title: str = Field(
        default="",
        description="Book title",
        examples=["1984"],
    )

    publisher: str = Field(
        default="",
        description="Book publisher",
        examples=["Secker & Warburg"],
    )

    model_config = ConfigDict(extra="ignore")

    @field_validator("author", "title", "publisher", mode="before")
    @classmethod
    def null_to_empty(cls, v: Any) -> Any:
        """Treat an explicit ``null`` like a missing key."""
        if v is None:
            return ""
        return v


class BookResponse(BaseModel):
    """A stored book, read straight from the ORM object."""

    id: int = Field(..., description="Unique identifier")
    author: str = ""
    title: str = ""
    publisher: str = ""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "author": "George Orwell",
                "title": "1984",
                "publisher": "Secker & Warburg",
            }
        },
    )


# =============================================================================
# Response Envelopes
# =============================================================================
class MessageResponse(BaseModel):
    """Envelope for write endpoints and for every error."""

    message: str


class BookEnvelope(MessageResponse):
    data: BookResponse


class BookListEnvelope(MessageResponse):
    """
    Envelope for the list endpoint.

    ``data`` holds every row in the table, in whatever order the database
    returns them.
    """

    data: list[BookResponse]
