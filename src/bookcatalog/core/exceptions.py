"""Custom exception hierarchy for BookCatalog.

This module defines a consistent exception hierarchy that enables:
- Structured error responses with error codes
- Consistent HTTP status code mapping
- Machine-readable error handling for API consumers

Usage:
    from bookcatalog.core.exceptions import BookNotFoundError

    raise BookNotFoundError(book_id="0b7a...")
"""

from typing import Any


class BookCatalogError(Exception):
    """Base exception for all BookCatalog errors.

    Attributes:
        code: Machine-readable error code (e.g., "BOOK_NOT_FOUND")
        message: Human-readable error message
        status_code: HTTP status code to return
        details: Additional error details (optional)
    """

    code: str = "INTERNAL_ERROR"
    message: str = "An unexpected error occurred"
    status_code: int = 500

    def __init__(
        self,
        message: str | None = None,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Override default message
            code: Override default error code
            details: Additional error details
        """
        if message:
            self.message = message
        if code:
            self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self, request_id: str | None = None) -> dict[str, Any]:
        """Convert exception to API error response format.

        Args:
            request_id: Request correlation ID

        Returns:
            Error response dictionary
        """
        error: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if request_id:
            error["request_id"] = request_id
        if self.details:
            error["details"] = self.details
        return {"error": error}


# =============================================================================
# Resource Not Found Errors (404)
# =============================================================================


class NotFoundError(BookCatalogError):
    """Base class for resource not found errors."""

    status_code: int = 404


class BookNotFoundError(NotFoundError):
    """Raised by the HTTP layer when a book id does not exist."""

    code: str = "BOOK_NOT_FOUND"
    message: str = "Book not found"

    def __init__(self, book_id: str | None = None, message: str | None = None) -> None:
        """Initialize with optional book ID."""
        details: dict[str, Any] = {}
        if book_id:
            details["book_id"] = book_id
            if not message:
                message = f"Book with ID {book_id} not found"

        super().__init__(message=message, details=details if details else None)


class CacheKeyNotFoundError(NotFoundError):
    """Raised when a cache key is absent or has expired."""

    code: str = "CACHE_KEY_NOT_FOUND"
    message: str = "Cache key not found"

    def __init__(self, key: str | None = None) -> None:
        """Initialize with optional cache key."""
        details: dict[str, Any] = {}
        message = None
        if key:
            details["key"] = key
            message = f"Cache key '{key}' not found or expired"

        super().__init__(message=message, details=details if details else None)


# =============================================================================
# Authentication Errors (401)
# =============================================================================


class AuthenticationError(BookCatalogError):
    """Raised when authentication fails."""

    code: str = "AUTHENTICATION_FAILED"
    message: str = "Authentication failed"
    status_code: int = 401


class InvalidCredentialsError(AuthenticationError):
    """Raised when login credentials are invalid."""

    code: str = "INVALID_CREDENTIALS"
    message: str = "Invalid username or password"


class InvalidTokenError(AuthenticationError):
    """Raised when JWT token is invalid or expired."""

    code: str = "INVALID_TOKEN"
    message: str = "Invalid or expired token"


# =============================================================================
# Validation Errors (400)
# =============================================================================


class ValidationError(BookCatalogError):
    """Raised when request input fails validation."""

    code: str = "VALIDATION_ERROR"
    message: str = "Validation error"
    status_code: int = 400

    def __init__(
        self,
        message: str | None = None,
        errors: dict[str, list[str]] | None = None,
    ) -> None:
        """Initialize with per-field error messages.

        Args:
            message: Override default message
            errors: Mapping of field name to its validation messages
        """
        super().__init__(message=message, details={"errors": errors} if errors else None)


# =============================================================================
# Cache Errors (500)
# =============================================================================


class CacheError(BookCatalogError):
    """Base class for cache layer errors."""

    code: str = "CACHE_ERROR"
    message: str = "Cache error"


class InvalidCachePatternError(CacheError):
    """Raised when a key pattern cannot be used for invalidation.

    This is a programming error inside the service, not a user error.
    """

    code: str = "INVALID_CACHE_PATTERN"
    message: str = "Invalid cache key pattern"

    def __init__(self, pattern: Any = None, message: str | None = None) -> None:
        """Initialize with the offending pattern."""
        super().__init__(message=message, details={"pattern": repr(pattern)})
