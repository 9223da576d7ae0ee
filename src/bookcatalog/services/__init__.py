"""Services package for BookCatalog.

This module exports service classes for business logic.
"""

from bookcatalog.services.books import BookService
from bookcatalog.services.cache import (
    CacheService,
    MemoryCacheService,
    RedisCacheService,
    create_cache_service,
)
from bookcatalog.services.refresher import BookRefresher

__all__ = [
    # Books
    "BookService",
    # Cache
    "CacheService",
    "MemoryCacheService",
    "RedisCacheService",
    "create_cache_service",
    # Background
    "BookRefresher",
]
