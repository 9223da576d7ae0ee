"""Domain models for BookCatalog."""

from bookcatalog.models.book import Book

__all__ = ["Book"]
