"""Book API schemas.

Request models carry the validation rules for the catalogue; anything
that reaches ``BookService`` has already passed them. JSON uses camelCase
keys (``publishedDate``, ``pageSize``); Python code uses snake_case.
"""

from datetime import UTC, date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from bookcatalog.schemas.common import CamelSchema

API_V2 = "2.0"


# =============================================================================
# Requests
# =============================================================================


class BookCreate(CamelSchema):
    """Request body for creating a book.

    Any ``id`` or timestamps sent by the client are ignored. Strings are
    stored as sent; surrounding whitespace counts towards the length rules
    but a value of only whitespace is rejected.
    """

    model_config = ConfigDict(str_strip_whitespace=False)

    title: str = Field(
        ...,
        min_length=3,
        description="Book title (at least 3 characters)",
        json_schema_extra={"example": "Clean Code"},
    )
    author: str = Field(
        ...,
        min_length=3,
        description="Author name (at least 3 characters)",
        json_schema_extra={"example": "Robert C. Martin"},
    )
    isbn: str = Field(
        ...,
        min_length=1,
        description="ISBN (presence only, no format check)",
        json_schema_extra={"example": "978-0132350884"},
    )
    published_date: date = Field(
        ...,
        description="Publication date (not in the future)",
        json_schema_extra={"example": "2008-08-11"},
    )

    @field_validator("title", "author", "isbn")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Value must not be blank.")
        return v

    @field_validator("published_date")
    @classmethod
    def validate_not_future(cls, v: date) -> date:
        """Reject publication dates after today (UTC)."""
        if v > datetime.now(UTC).date():
            raise ValueError("Published date cannot be in the future.")
        return v


class BookUpdate(BookCreate):
    """Request body for replacing a book's editable fields."""


class PaginationParams(BaseModel):
    """Query parameters for the paged book listing.

    Attributes:
        page: Page number (1-indexed)
        page_size: Items per page (1-100)
        search: Case-insensitive term matched against title, author and ISBN
        sort_by: title, author, isbn, publishedDate or createdAt
        desc: Sort descending (ignored for unknown sort fields)
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    page: int = Field(1, ge=1, description="Page number (1-indexed)")
    page_size: int = Field(10, ge=1, le=100, description="Items per page (max 100)")
    search: str | None = Field(None, description="Search term")
    sort_by: str | None = Field(None, description="Field to sort by")
    desc: bool = Field(False, description="Sort in descending order")


# =============================================================================
# Responses
# =============================================================================


class BookResponse(CamelSchema):
    """Book representation returned by the API."""

    id: UUID = Field(..., description="Unique identifier")
    title: str
    author: str
    isbn: str
    published_date: date
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime | None = Field(None, description="Last update timestamp")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "0b7a6f1e-3c1d-4c8e-9a55-1f0d6f4c2a11",
                "title": "Clean Code",
                "author": "Robert C. Martin",
                "isbn": "978-0132350884",
                "publishedDate": "2008-08-11",
                "createdAt": "2024-01-01T12:00:00Z",
                "updatedAt": None,
            }
        }
    )


class BookResponseV2(BookResponse):
    """Version 2.0 book representation with a generated summary."""

    summary: str = Field(..., description="Short generated description")
    version: str = Field(API_V2, description="API representation version")

    @classmethod
    def from_book(cls, book: BookResponse) -> "BookResponseV2":
        """Extend a v1 representation with the v2 fields."""
        return cls(
            **book.model_dump(),
            summary=f"Book by {book.author}, published in {book.published_date:%Y}",
            version=API_V2,
        )
