"""Book repository interface.

The service layer depends only on this contract, so alternate backends
(for example a database-backed store) can be swapped in without touching
``BookService``.

Absent ids are reported with ``None`` / ``False`` rather than exceptions;
callers branch on the result.

Usage:
    from bookcatalog.repositories import InMemoryBookRepository

    repo = InMemoryBookRepository(seed=SEED_BOOKS)
    book = await repo.get_by_id(book_id)
    items, total = await repo.get_paged(page=1, page_size=10, search="clean")
"""

from abc import ABC, abstractmethod
from uuid import UUID

from bookcatalog.models.book import Book


class BookRepository(ABC):
    """Async capability interface for book storage."""

    @abstractmethod
    async def add(self, book: Book) -> Book:
        """Insert a book.

        The stored record gets a freshly generated id and creation
        timestamp; any id or timestamps on ``book`` are ignored.

        Returns:
            The stored book
        """

    @abstractmethod
    async def get_by_id(self, book_id: UUID) -> Book | None:
        """Get a book by id, or None if absent."""

    @abstractmethod
    async def get_all(self) -> list[Book]:
        """Get every book in insertion order."""

    @abstractmethod
    async def update(self, book: Book) -> Book | None:
        """Replace the editable fields of the book with ``book.id``.

        Returns:
            The updated book, or None if no book has that id
        """

    @abstractmethod
    async def delete(self, book_id: UUID) -> bool:
        """Delete a book.

        Returns:
            True if a book was removed, False if the id was absent
        """

    @abstractmethod
    async def get_paged(
        self,
        page: int,
        page_size: int,
        search: str | None = None,
        sort_by: str | None = None,
        desc: bool = False,
    ) -> tuple[list[Book], int]:
        """Run a filtered, sorted, paginated query.

        Returns:
            Tuple of (books on the requested page, total matching count)
        """

    @abstractmethod
    async def count(self) -> int:
        """Count stored books."""
