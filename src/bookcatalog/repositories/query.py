"""In-memory query evaluation for books: filter, sort and paginate.

The evaluator is pure: it never mutates the sequence it is given, so the
same snapshot can be read by any number of concurrent queries.

Algorithm:
    1. Filter by a case-insensitive substring match on title, author or ISBN.
    2. Sort by a recognised field (stable); unknown fields fall back to
       title ascending and ignore the descending flag.
    3. Count the filtered set.
    4. Slice out the requested page.
"""

from collections.abc import Callable, Iterable, Sequence
from typing import Any

from bookcatalog.models.book import Book

DEFAULT_SORT_FIELD = "title"

# Canonical (normalised) sort field name -> sort key
SORT_KEYS: dict[str, Callable[[Book], Any]] = {
    "title": lambda book: book.title.casefold(),
    "author": lambda book: book.author.casefold(),
    "isbn": lambda book: book.isbn.casefold(),
    "publisheddate": lambda book: book.published_date,
    "createdat": lambda book: book.created_at,
}


def normalize_sort_field(sort_by: str | None) -> str | None:
    """Map a caller-supplied sort field to its canonical name.

    Matching ignores case only: ``publishedDate`` and ``PUBLISHEDDATE`` are
    the same field, ``published_date`` and ``" title "`` are unknown.

    Returns:
        The canonical field name, or None if the field is absent or unknown
    """
    if not sort_by:
        return None
    name = sort_by.lower()
    return name if name in SORT_KEYS else None


def has_search_term(search: str | None) -> bool:
    """Return True if ``search`` should filter results (not blank)."""
    return bool(search and search.strip())


def filter_books(books: Iterable[Book], search: str | None) -> list[Book]:
    """Keep books whose title, author or ISBN contains ``search``.

    A blank search term keeps everything.
    """
    if not has_search_term(search):
        return list(books)

    term = search.casefold()
    return [
        book
        for book in books
        if term in book.title.casefold()
        or term in book.author.casefold()
        or term in book.isbn.casefold()
    ]


def sort_books(
    books: Iterable[Book],
    sort_by: str | None = None,
    desc: bool = False,
) -> list[Book]:
    """Sort books by a named field.

    Python's sort is stable in both directions, so books with equal keys
    keep their store order.
    """
    field = normalize_sort_field(sort_by)
    if field is None:
        return sorted(books, key=SORT_KEYS[DEFAULT_SORT_FIELD])
    return sorted(books, key=SORT_KEYS[field], reverse=desc)


def paginate(books: Sequence[Book], page: int, page_size: int) -> list[Book]:
    """Return the 1-indexed ``page`` of ``books``; past the end is empty."""
    start = (page - 1) * page_size
    return list(books[start : start + page_size])


def run_paged_query(
    books: Iterable[Book],
    *,
    page: int,
    page_size: int,
    search: str | None = None,
    sort_by: str | None = None,
    desc: bool = False,
) -> tuple[list[Book], int]:
    """Filter, sort and paginate ``books``.

    Args:
        books: Books in store order
        page: 1-indexed page number
        page_size: Items per page
        search: Optional search term
        sort_by: Optional sort field name
        desc: Sort descending (only for recognised fields)

    Returns:
        Tuple of (books on the requested page, total matching count)
    """
    matching = sort_books(filter_books(books, search), sort_by, desc)
    return paginate(matching, page, page_size), len(matching)
