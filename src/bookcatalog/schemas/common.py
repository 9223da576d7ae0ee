"""Common Pydantic schemas used across the API.

This module provides shared schemas for:
- Error responses (consistent error format)
- Paged results (standardized list responses)
- Health checks
"""

from math import ceil
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Generic type for paged responses
T = TypeVar("T")


# =============================================================================
# Base Configuration
# =============================================================================


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(
        from_attributes=True,  # Allow dataclass/ORM conversion
        populate_by_name=True,  # Allow both alias and field name
        str_strip_whitespace=True,  # Strip whitespace from strings
    )


class CamelSchema(BaseSchema):
    """Schema serialised with camelCase keys (``published_date`` -> ``publishedDate``)."""

    model_config = ConfigDict(alias_generator=to_camel)


# =============================================================================
# Error Schemas
# =============================================================================


class ErrorDetail(BaseModel):
    """Details of an error response.

    Attributes:
        code: Machine-readable error code (e.g., "BOOK_NOT_FOUND")
        message: Human-readable error description
        request_id: Correlation ID for tracing (optional)
        details: Additional error context, e.g. per-field validation errors
    """

    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    request_id: str | None = Field(
        None, description="Request correlation ID for tracing"
    )
    details: dict[str, Any] | None = Field(
        None, description="Additional error context"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "code": "VALIDATION_ERROR",
                "message": "Invalid request parameters",
                "request_id": "abc-123-def-456",
                "details": {"errors": {"title": ["String should have at least 3 characters"]}},
            }
        }
    )


class ErrorResponse(BaseModel):
    """Standard error response wrapper.

    All API errors return this format for consistency.
    """

    error: ErrorDetail


# =============================================================================
# Paged Result
# =============================================================================


class PagedResult(CamelSchema, Generic[T]):
    """Generic paged response wrapper.

    Attributes:
        items: Items on the current page
        page: Current page number (echoed)
        page_size: Items per page (echoed)
        total_count: Items matching the query across all pages
        total_pages: ceil(total_count / page_size)
    """

    items: list[T] = Field(..., description="Items on the current page")
    page: int = Field(..., ge=1, description="Current page number")
    page_size: int = Field(..., ge=1, description="Items per page")
    total_count: int = Field(..., ge=0, description="Total matching items")
    total_pages: int = Field(..., ge=0, description="Total number of pages")

    @classmethod
    def create(
        cls, items: list[T], total_count: int, page: int, page_size: int
    ) -> "PagedResult[T]":
        """Factory method to create a paged result.

        Args:
            items: Items for the current page
            total_count: Total number of matching items
            page: Current page number
            page_size: Page size

        Returns:
            Paged result with calculated page count
        """
        return cls(
            items=items,
            page=page,
            page_size=page_size,
            total_count=total_count,
            total_pages=ceil(total_count / page_size),
        )


# =============================================================================
# Health Check Schemas
# =============================================================================


class HealthCheckResponse(BaseModel):
    """Readiness endpoint response.

    Attributes:
        status: Overall health status
        checks: Individual dependency checks
    """

    status: str = Field(..., pattern="^(ok|degraded|error)$")
    checks: dict[str, str] = Field(
        default_factory=dict, description="Individual service checks"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "status": "ok",
                "checks": {"cache": "ok", "repository": "ok"},
            }
        }
    )

