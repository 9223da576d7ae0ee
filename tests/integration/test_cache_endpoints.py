"""Integration tests for the cache diagnostic endpoints."""

import pytest
from fastapi import FastAPI
from httpx import AsyncClient


class TestCacheEndpoints:
    """Tests for /api/cache/*."""

    @pytest.mark.asyncio
    async def test_requires_auth(self, async_client: AsyncClient) -> None:
        """Test that cache diagnostics are protected."""
        response = await async_client.delete("/api/cache/remove-pattern")
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_round_trip(self, authenticated_client: AsyncClient) -> None:
        """Test set-then-get through the cache."""
        response = await authenticated_client.post(
            "/api/cache/test",
            params={"key": "test:key", "value": "hello", "expirationSeconds": 60},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["cached_value"]["message"] == "hello"

    @pytest.mark.asyncio
    async def test_get_value(self, authenticated_client: AsyncClient) -> None:
        """Test reading back a stored value."""
        await authenticated_client.post(
            "/api/cache/test", params={"key": "test:key", "value": "hello"}
        )

        response = await authenticated_client.get("/api/cache/get/test:key")

        assert response.status_code == 200
        assert response.json()["value"]["message"] == "hello"

    @pytest.mark.asyncio
    async def test_get_missing_value(self, authenticated_client: AsyncClient) -> None:
        """Test that an absent key is a 404."""
        response = await authenticated_client.get("/api/cache/get/nope")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "CACHE_KEY_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_remove_key(self, authenticated_client: AsyncClient) -> None:
        """Test removing a single key."""
        await authenticated_client.post("/api/cache/test", params={"key": "test:key"})

        response = await authenticated_client.delete("/api/cache/remove/test:key")

        assert response.status_code == 200
        get_response = await authenticated_client.get("/api/cache/get/test:key")
        assert get_response.status_code == 404

    @pytest.mark.asyncio
    async def test_remove_pattern_defaults_to_books(
        self, app: FastAPI, authenticated_client: AsyncClient
    ) -> None:
        """Test that the default pattern clears cached book pages only."""
        await authenticated_client.get("/api/v2/books")
        await authenticated_client.get("/api/v2/books", params={"page": 2})
        await authenticated_client.post("/api/cache/test", params={"key": "test:key"})

        response = await authenticated_client.delete("/api/cache/remove-pattern")

        assert response.status_code == 200
        assert response.json()["removed"] == 2
        assert await app.state.cache.keys() == ["test:key"]

    @pytest.mark.asyncio
    async def test_remove_pattern_empty_is_rejected(
        self, authenticated_client: AsyncClient
    ) -> None:
        """Test that an empty pattern is a 400."""
        response = await authenticated_client.delete(
            "/api/cache/remove-pattern", params={"pattern": ""}
        )
        assert response.status_code == 400
