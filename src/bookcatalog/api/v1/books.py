"""Book endpoints (v1).

Plain CRUD over the catalogue. The paged listing lives in v2.
"""

from uuid import UUID

from fastapi import APIRouter, Response, status

from bookcatalog.core.exceptions import BookNotFoundError
from bookcatalog.dependencies import BookServiceDep
from bookcatalog.schemas.books import BookCreate, BookResponse, BookUpdate
from bookcatalog.schemas.common import ErrorResponse

router = APIRouter()


@router.get(
    "",
    response_model=list[BookResponse],
    summary="List all books",
    description="Return every book in insertion order.",
)
async def list_books(books: BookServiceDep) -> list[BookResponse]:
    """List the whole catalogue."""
    return await books.get_all()


@router.get(
    "/{book_id}",
    response_model=BookResponse,
    summary="Get a book",
    responses={404: {"model": ErrorResponse, "description": "Book not found"}},
)
async def get_book(book_id: UUID, books: BookServiceDep) -> BookResponse:
    """Get a single book by id."""
    book = await books.get_by_id(book_id)
    if book is None:
        raise BookNotFoundError(book_id=str(book_id))
    return book


@router.post(
    "",
    response_model=BookResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a book",
    description=(
        "Title and author need at least 3 characters, ISBN is required and "
        "the publication date cannot be in the future."
    ),
    responses={400: {"model": ErrorResponse, "description": "Validation errors"}},
)
async def create_book(
    data: BookCreate, response: Response, books: BookServiceDep
) -> BookResponse:
    """Create a book."""
    book = await books.create(data)
    response.headers["Location"] = f"/api/v1/books/{book.id}"
    return book


@router.put(
    "/{book_id}",
    response_model=BookResponse,
    summary="Update a book",
    responses={
        400: {"model": ErrorResponse, "description": "Validation errors"},
        404: {"model": ErrorResponse, "description": "Book not found"},
    },
)
async def update_book(
    book_id: UUID, data: BookUpdate, books: BookServiceDep
) -> BookResponse:
    """Replace a book's title, author, ISBN and publication date."""
    book = await books.update(book_id, data)
    if book is None:
        raise BookNotFoundError(book_id=str(book_id))
    return book


@router.delete(
    "/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a book",
    responses={404: {"model": ErrorResponse, "description": "Book not found"}},
)
async def delete_book(book_id: UUID, books: BookServiceDep) -> Response:
    """Delete a book."""
    if not await books.delete(book_id):
        raise BookNotFoundError(book_id=str(book_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
