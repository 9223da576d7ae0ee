"""Repository pattern package for BookCatalog.

This module exports the repository interface and its in-memory variant.
"""

from bookcatalog.repositories.base import BookRepository
from bookcatalog.repositories.memory import InMemoryBookRepository
from bookcatalog.repositories.seed import SEED_BOOKS

__all__ = [
    "BookRepository",
    "InMemoryBookRepository",
    "SEED_BOOKS",
]
