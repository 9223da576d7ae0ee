"""In-memory BookRepository.

A single coarse lock serialises mutations with each other and with the
filter/sort pass of paged queries. Books are copied on the way in and on
the way out, so nothing outside the store can observe or cause a
half-applied change.
"""

import threading
from collections.abc import Iterable
from dataclasses import replace
from uuid import UUID, uuid4

import structlog

from bookcatalog.models.book import Book, utcnow
from bookcatalog.repositories.base import BookRepository
from bookcatalog.repositories.query import run_paged_query

logger = structlog.get_logger(__name__)


class InMemoryBookRepository(BookRepository):
    """Book store backed by a Python list (insertion order)."""

    def __init__(self, seed: Iterable[Book] = ()) -> None:
        """Initialize the store.

        Args:
            seed: Books to preload, in order; each gets a fresh id and
                creation timestamp just like an inserted book
        """
        self._books: list[Book] = [self._stamp(book) for book in seed]
        self._lock = threading.Lock()

    @staticmethod
    def _stamp(book: Book) -> Book:
        return replace(book, id=uuid4(), created_at=utcnow(), updated_at=None)

    async def add(self, book: Book) -> Book:
        stored = self._stamp(book)
        with self._lock:
            self._books.append(stored)
        logger.debug("book_stored", book_id=str(stored.id), isbn=stored.isbn)
        return replace(stored)

    async def get_by_id(self, book_id: UUID) -> Book | None:
        with self._lock:
            book = self._find(book_id)
            return replace(book) if book else None

    async def get_all(self) -> list[Book]:
        with self._lock:
            return [replace(book) for book in self._books]

    async def update(self, book: Book) -> Book | None:
        with self._lock:
            existing = self._find(book.id)
            if existing is None:
                return None

            existing.title = book.title
            existing.author = book.author
            existing.isbn = book.isbn
            existing.published_date = book.published_date
            existing.updated_at = utcnow()
            return replace(existing)

    async def delete(self, book_id: UUID) -> bool:
        with self._lock:
            for index, book in enumerate(self._books):
                if book.id == book_id:
                    del self._books[index]
                    return True
            return False

    async def get_paged(
        self,
        page: int,
        page_size: int,
        search: str | None = None,
        sort_by: str | None = None,
        desc: bool = False,
    ) -> tuple[list[Book], int]:
        with self._lock:
            items, total = run_paged_query(
                self._books,
                page=page,
                page_size=page_size,
                search=search,
                sort_by=sort_by,
                desc=desc,
            )
            return [replace(book) for book in items], total

    async def count(self) -> int:
        with self._lock:
            return len(self._books)

    def _find(self, book_id: UUID) -> Book | None:
        # Caller must hold self._lock
        return next((book for book in self._books if book.id == book_id), None)
