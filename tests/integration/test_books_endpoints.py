"""Integration tests for the v1 book endpoints.

These run against the real app with the seeded in-memory catalogue and
API key authentication.
"""

from typing import Any
from uuid import uuid4

import pytest
from httpx import AsyncClient


class TestAuthRequired:
    """Tests that book endpoints are protected."""

    @pytest.mark.asyncio
    async def test_missing_api_key(self, async_client: AsyncClient) -> None:
        """Test that requests without credentials get 401."""
        response = await async_client.get("/api/v1/books")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "AUTHENTICATION_FAILED"

    @pytest.mark.asyncio
    async def test_wrong_api_key(self, async_client: AsyncClient) -> None:
        """Test that a wrong API key gets 401."""
        response = await async_client.get(
            "/api/v1/books", headers={"X-API-Key": "wrong"}
        )
        assert response.status_code == 401


class TestListAndGet:
    """Tests for GET /api/v1/books and GET /api/v1/books/{id}."""

    @pytest.mark.asyncio
    async def test_list_returns_seeded_catalogue(
        self, authenticated_client: AsyncClient
    ) -> None:
        """Test the full list in insertion order."""
        response = await authenticated_client.get("/api/v1/books")

        assert response.status_code == 200
        data = response.json()
        assert len(data) == 12
        assert data[0]["title"] == "Clean Code"
        assert {"id", "publishedDate", "createdAt", "updatedAt"} <= set(data[0])

    @pytest.mark.asyncio
    async def test_get_by_id(self, authenticated_client: AsyncClient) -> None:
        """Test fetching a single book."""
        first = (await authenticated_client.get("/api/v1/books")).json()[0]

        response = await authenticated_client.get(f"/api/v1/books/{first['id']}")

        assert response.status_code == 200
        assert response.json()["isbn"] == first["isbn"]

    @pytest.mark.asyncio
    async def test_get_missing_returns_404(
        self, authenticated_client: AsyncClient
    ) -> None:
        """Test the error envelope for an unknown id."""
        response = await authenticated_client.get(f"/api/v1/books/{uuid4()}")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "BOOK_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_get_malformed_id_returns_400(
        self, authenticated_client: AsyncClient
    ) -> None:
        """Test that a non-UUID id is a validation error."""
        response = await authenticated_client.get("/api/v1/books/not-a-uuid")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"


class TestCreate:
    """Tests for POST /api/v1/books."""

    @pytest.mark.asyncio
    async def test_create_returns_201_with_location(
        self, authenticated_client: AsyncClient, sample_book_data: dict[str, Any]
    ) -> None:
        """Test a successful create."""
        response = await authenticated_client.post(
            "/api/v1/books", json=sample_book_data
        )

        assert response.status_code == 201
        data = response.json()
        assert data["title"] == "Effective Python"
        assert data["publishedDate"] == "2019-11-15"
        assert data["updatedAt"] is None
        assert response.headers["Location"] == f"/api/v1/books/{data['id']}"

    @pytest.mark.asyncio
    async def test_create_ignores_client_id(
        self, authenticated_client: AsyncClient, sample_book_data: dict[str, Any]
    ) -> None:
        """Test that the server assigns the id."""
        client_id = str(uuid4())
        response = await authenticated_client.post(
            "/api/v1/books", json={**sample_book_data, "id": client_id}
        )

        assert response.status_code == 201
        assert response.json()["id"] != client_id

    @pytest.mark.asyncio
    async def test_create_invalid_returns_400_with_field_errors(
        self, app, authenticated_client: AsyncClient, sample_book_data: dict[str, Any]
    ) -> None:
        """Test that validation failures name each bad field."""
        response = await authenticated_client.post(
            "/api/v1/books",
            json={
                **sample_book_data,
                "title": "AB",
                "author": "XY",
                "publishedDate": "2999-01-01",
            },
        )

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert set(error["details"]["errors"]) == {"title", "author", "publishedDate"}
        assert await app.state.repository.count() == 12


class TestUpdateAndDelete:
    """Tests for PUT and DELETE /api/v1/books/{id}."""

    @pytest.mark.asyncio
    async def test_update(
        self, authenticated_client: AsyncClient, sample_book_data: dict[str, Any]
    ) -> None:
        """Test replacing a book's fields."""
        created = (
            await authenticated_client.post("/api/v1/books", json=sample_book_data)
        ).json()

        response = await authenticated_client.put(
            f"/api/v1/books/{created['id']}",
            json={**sample_book_data, "title": "Effective Python 2nd Edition"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "Effective Python 2nd Edition"
        assert data["createdAt"] == created["createdAt"]
        assert data["updatedAt"] is not None

    @pytest.mark.asyncio
    async def test_update_missing_returns_404(
        self, authenticated_client: AsyncClient, sample_book_data: dict[str, Any]
    ) -> None:
        """Test updating an unknown id."""
        response = await authenticated_client.put(
            f"/api/v1/books/{uuid4()}", json=sample_book_data
        )
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete(
        self, authenticated_client: AsyncClient, sample_book_data: dict[str, Any]
    ) -> None:
        """Test deleting a book, then deleting it again."""
        created = (
            await authenticated_client.post("/api/v1/books", json=sample_book_data)
        ).json()

        response = await authenticated_client.delete(f"/api/v1/books/{created['id']}")
        assert response.status_code == 204

        response = await authenticated_client.delete(f"/api/v1/books/{created['id']}")
        assert response.status_code == 404
