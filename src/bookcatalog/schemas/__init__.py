"""Pydantic schemas for API requests and responses."""

from bookcatalog.schemas.books import (
    BookCreate,
    BookResponse,
    BookResponseV2,
    BookUpdate,
    PaginationParams,
)
from bookcatalog.schemas.common import ErrorResponse, PagedResult

__all__ = [
    "BookCreate",
    "BookResponse",
    "BookResponseV2",
    "BookUpdate",
    "ErrorResponse",
    "PagedResult",
    "PaginationParams",
]
