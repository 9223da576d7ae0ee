"""Book endpoints (v2).

Adds the paged, searchable, sortable listing and a richer book shape
(``summary`` and ``version``).
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, Response, status

from bookcatalog.core.exceptions import BookNotFoundError
from bookcatalog.core.logging import get_logger
from bookcatalog.dependencies import BookServiceDep
from bookcatalog.schemas.books import BookCreate, BookResponseV2, PaginationParams
from bookcatalog.schemas.common import ErrorResponse, PagedResult

logger = get_logger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=PagedResult[BookResponseV2],
    summary="List books (paged)",
    description=(
        "Paged listing with an optional case-insensitive search over title, "
        "author and ISBN. `sortBy` accepts title, author, isbn, publishedDate "
        "or createdAt; anything else sorts by title ascending."
    ),
    responses={400: {"model": ErrorResponse, "description": "Invalid parameters"}},
)
async def list_books_paged(
    books: BookServiceDep,
    page: Annotated[int, Query(ge=1, description="Page number")] = 1,
    page_size: Annotated[
        int, Query(alias="pageSize", ge=1, le=100, description="Items per page")
    ] = 10,
    search: Annotated[str | None, Query(description="Search term")] = None,
    sort_by: Annotated[
        str | None, Query(alias="sortBy", description="Field to sort by")
    ] = None,
    desc: Annotated[bool, Query(description="Sort descending")] = False,
) -> PagedResult[BookResponseV2]:
    """Get a page of books."""
    params = PaginationParams(
        page=page, page_size=page_size, search=search, sort_by=sort_by, desc=desc
    )
    logger.info(
        "list_books_paged_request",
        page=page,
        page_size=page_size,
        search=search,
        sort_by=sort_by,
        desc=desc,
    )

    result = await books.get_paged(params)
    return PagedResult[BookResponseV2].create(
        items=[BookResponseV2.from_book(book) for book in result.items],
        total_count=result.total_count,
        page=result.page,
        page_size=result.page_size,
    )


@router.get(
    "/{book_id}",
    response_model=BookResponseV2,
    summary="Get a book (v2)",
    responses={404: {"model": ErrorResponse, "description": "Book not found"}},
)
async def get_book(book_id: UUID, books: BookServiceDep) -> BookResponseV2:
    """Get a single book by id."""
    book = await books.get_by_id(book_id)
    if book is None:
        raise BookNotFoundError(book_id=str(book_id))
    return BookResponseV2.from_book(book)


@router.post(
    "",
    response_model=BookResponseV2,
    status_code=status.HTTP_201_CREATED,
    summary="Create a book (v2)",
    description=(
        "Title and author need at least 3 characters, ISBN is required and "
        "the publication date cannot be in the future."
    ),
    responses={400: {"model": ErrorResponse, "description": "Validation errors"}},
)
async def create_book(
    data: BookCreate, response: Response, books: BookServiceDep
) -> BookResponseV2:
    """Create a book."""
    book = await books.create(data)
    response.headers["Location"] = f"/api/v2/books/{book.id}"
    return BookResponseV2.from_book(book)
