"""Pytest configuration and fixtures for BookCatalog tests.

This module provides reusable fixtures for:
- Async test client
- Settings overrides
- Authentication helpers
- A controllable clock for cache expiry
- Sample book data
"""

from collections.abc import AsyncGenerator
from datetime import date
from typing import Any

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from bookcatalog.config import Settings
from bookcatalog.main import create_app
from bookcatalog.models.book import Book

# =============================================================================
# Settings Fixtures
# =============================================================================


@pytest.fixture
def test_settings() -> Settings:
    """Create test-specific settings.

    Overrides production settings with test-appropriate values.
    """
    return Settings(
        app_env="development",  # type: ignore[arg-type]
        debug=True,
        log_level="DEBUG",  # type: ignore[arg-type]
        log_format="console",  # type: ignore[arg-type]
        cache_backend="memory",  # type: ignore[arg-type]
        seed_books=True,
        auth_mode="api_key",  # type: ignore[arg-type]
        api_key="test-api-key",  # type: ignore[arg-type]
        jwt_secret_key="test-jwt-secret-key-with-enough-bytes",  # type: ignore[arg-type]
        book_refresh_enabled=False,
    )


# =============================================================================
# Application Fixtures
# =============================================================================


@pytest.fixture
def app(test_settings: Settings) -> FastAPI:
    """Create a test FastAPI application with test settings."""
    return create_app(settings=test_settings)


@pytest.fixture
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client for testing.

    This client makes requests to the test app without starting a server.

    Usage:
        async def test_endpoint(async_client: AsyncClient):
            response = await async_client.get("/health/live")
            assert response.status_code == 200
    """
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


@pytest.fixture
async def authenticated_client(
    app: FastAPI, test_settings: Settings
) -> AsyncGenerator[AsyncClient, None]:
    """Create an authenticated async client using API key.

    This client automatically includes the X-API-Key header.

    Usage:
        async def test_protected_endpoint(authenticated_client: AsyncClient):
            response = await authenticated_client.get("/api/v1/books")
            assert response.status_code == 200
    """
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers={"X-API-Key": test_settings.api_key.get_secret_value()},
    ) as client:
        yield client


# =============================================================================
# Clock Fixtures
# =============================================================================


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    """Return a clock that only moves when told to."""
    return FakeClock()


# =============================================================================
# Helper Fixtures
# =============================================================================


@pytest.fixture
def sample_book_data() -> dict[str, Any]:
    """Return a valid create-book request body (camelCase)."""
    return {
        "title": "Effective Python",
        "author": "Brett Slatkin",
        "isbn": "978-0134853987",
        "publishedDate": "2019-11-15",
    }


@pytest.fixture
def sample_books() -> list[Book]:
    """Return a small unsorted catalogue for query tests."""
    return [
        Book(
            title="Refactoring",
            author="Martin Fowler",
            isbn="978-0201485677",
            published_date=date(1999, 7, 8),
        ),
        Book(
            title="clean code",
            author="Robert C. Martin",
            isbn="978-0132350884",
            published_date=date(2008, 8, 11),
        ),
        Book(
            title="Design Patterns",
            author="Gang of Four",
            isbn="978-0201633610",
            published_date=date(1994, 10, 21),
        ),
        Book(
            title="Clean Architecture",
            author="Robert C. Martin",
            isbn="978-0134494166",
            published_date=date(2017, 9, 20),
        ),
    ]
