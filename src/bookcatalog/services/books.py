"""Book service - the façade API handlers use for the catalogue.

Paged queries are cached for a short time under the ``books:paged:``
namespace. Any write that changes the catalogue drops that whole
namespace, so the next read recomputes.

Cache Key Format:
    books:paged:page:{page}:pageSize:{size}[:sortBy:{field}[:desc:true]][:search:{term}]

Parameters that cannot change the result are left out of the key: a blank
search, an unknown sort field (which always sorts by title ascending), and
``desc`` when there is no recognised sort field. The search term is the
last segment because it is the only free-form one.
"""

from uuid import UUID

import structlog
from pydantic import ValidationError

from bookcatalog.core.logging import log_context
from bookcatalog.models.book import Book
from bookcatalog.repositories.base import BookRepository
from bookcatalog.repositories.query import has_search_term, normalize_sort_field
from bookcatalog.schemas.books import (
    BookCreate,
    BookResponse,
    BookUpdate,
    PaginationParams,
)
from bookcatalog.schemas.common import PagedResult
from bookcatalog.services.cache import CacheService

logger = structlog.get_logger(__name__)

PagedBooks = PagedResult[BookResponse]


class BookService:
    """Catalogue operations with cached paged reads.

    Usage:
        ```python
        service = BookService(InMemoryBookRepository(), MemoryCacheService())
        result = await service.get_paged(PaginationParams(page=1, page_size=5))
        ```
    """

    PAGED_KEY_PREFIX = "books:paged:"
    DEFAULT_CACHE_TTL = 30.0  # seconds

    def __init__(
        self,
        repository: BookRepository,
        cache: CacheService,
        cache_ttl_seconds: float = DEFAULT_CACHE_TTL,
    ) -> None:
        """Initialize the service.

        Args:
            repository: Book storage backend
            cache: Cache for paged query results
            cache_ttl_seconds: Lifetime of a cached page
        """
        self.repository = repository
        self.cache = cache
        self.cache_ttl_seconds = cache_ttl_seconds

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    async def get_paged(self, params: PaginationParams) -> PagedBooks:
        """Get a page of books, served from cache when possible.

        Args:
            params: Validated pagination parameters

        Returns:
            The requested page with total counts
        """
        cache_key = self.paged_key(params)

        cached = await self._read_cache(cache_key)
        if cached is not None:
            logger.debug("paged_cache_hit", cache_key=cache_key)
            return cached

        logger.debug("paged_cache_miss", cache_key=cache_key)
        books, total_count = await self.repository.get_paged(
            page=params.page,
            page_size=params.page_size,
            search=params.search,
            sort_by=params.sort_by,
            desc=params.desc,
        )
        result = PagedBooks.create(
            items=[BookResponse.model_validate(book) for book in books],
            total_count=total_count,
            page=params.page,
            page_size=params.page_size,
        )

        await self._write_cache(cache_key, result)
        return result

    async def get_by_id(self, book_id: UUID) -> BookResponse | None:
        """Get a book by id, or None if it does not exist."""
        book = await self.repository.get_by_id(book_id)
        return BookResponse.model_validate(book) if book else None

    async def get_all(self) -> list[BookResponse]:
        """Get every book in insertion order."""
        books = await self.repository.get_all()
        return [BookResponse.model_validate(book) for book in books]

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    async def create(self, data: BookCreate) -> BookResponse:
        """Create a book and drop cached pages.

        ``data`` is trusted: validation happens before the service is called.
        """
        book = await self.repository.add(
            Book(
                title=data.title,
                author=data.author,
                isbn=data.isbn,
                published_date=data.published_date,
            )
        )
        logger.info("book_created", book_id=str(book.id), title=book.title)

        await self.invalidate_paged()
        return BookResponse.model_validate(book)

    async def update(self, book_id: UUID, data: BookUpdate) -> BookResponse | None:
        """Replace a book's editable fields.

        Returns:
            The updated book, or None if it does not exist
        """
        with log_context(book_id=str(book_id)):
            book = await self.repository.update(
                Book(
                    id=book_id,
                    title=data.title,
                    author=data.author,
                    isbn=data.isbn,
                    published_date=data.published_date,
                )
            )
            if book is None:
                logger.info("book_update_missing")
                return None

            logger.info("book_updated")
            await self.invalidate_paged()
            return BookResponse.model_validate(book)

    async def delete(self, book_id: UUID) -> bool:
        """Delete a book.

        Returns:
            True if deleted, False if it did not exist
        """
        deleted = await self.repository.delete(book_id)
        if deleted:
            logger.info("book_deleted", book_id=str(book_id))
            await self.invalidate_paged()
        return deleted

    async def invalidate_paged(self) -> int:
        """Drop every cached paged query."""
        removed = await self.cache.invalidate_pattern(f"{self.PAGED_KEY_PREFIX}*")
        logger.debug("paged_cache_invalidated", removed=removed)
        return removed

    # -------------------------------------------------------------------------
    # Cache helpers
    # -------------------------------------------------------------------------

    async def _read_cache(self, cache_key: str) -> PagedBooks | None:
        """Return the cached page, or None on a miss.

        A value that is not a valid page is dropped and treated as a miss.
        """
        try:
            cached = await self.cache.get(cache_key)
        except Exception as e:
            logger.warning("paged_cache_read_failed", cache_key=cache_key, error=str(e))
            return None

        if cached is None:
            return None

        try:
            return PagedBooks.model_validate(cached)
        except ValidationError as e:
            logger.warning(
                "paged_cache_read_failed",
                cache_key=cache_key,
                error="invalid cached page",
                error_count=e.error_count(),
            )
            await self.cache.invalidate(cache_key)
            return None

    async def _write_cache(self, cache_key: str, result: PagedBooks) -> None:
        try:
            await self.cache.set(
                cache_key, result.model_dump(mode="json"), self.cache_ttl_seconds
            )
        except Exception as e:
            logger.warning("paged_cache_store_failed", cache_key=cache_key, error=str(e))

    @classmethod
    def paged_key(cls, params: PaginationParams) -> str:
        """Generate a deterministic cache key for paged query parameters.

        Same effective query = same key = cache hit.

        Args:
            params: Pagination parameters

        Returns:
            Cache key (e.g., "books:paged:page:1:pageSize:10:sortBy:author:desc:true")
        """
        parts = [f"page:{params.page}", f"pageSize:{params.page_size}"]

        sort_field = normalize_sort_field(params.sort_by)
        if sort_field:
            parts.append(f"sortBy:{sort_field}")
            if params.desc:
                parts.append("desc:true")

        if has_search_term(params.search):
            parts.append(f"search:{params.search.casefold()}")

        return cls.PAGED_KEY_PREFIX + ":".join(parts)
