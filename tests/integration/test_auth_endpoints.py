"""Integration tests for JWT login and bearer authentication."""

from collections.abc import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from bookcatalog.config import AuthMode, Settings
from bookcatalog.main import create_app


@pytest.fixture
def jwt_settings(test_settings: Settings) -> Settings:
    """Test settings switched to JWT bearer authentication."""
    return test_settings.model_copy(update={"auth_mode": AuthMode.JWT})


@pytest.fixture
def jwt_app(jwt_settings: Settings) -> FastAPI:
    return create_app(settings=jwt_settings)


@pytest.fixture
async def jwt_client(jwt_app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=jwt_app),
        base_url="http://test",
    ) as client:
        yield client


async def login(client: AsyncClient, username: str = "elif", password: str = "1234"):
    return await client.post(
        "/api/v1/auth/login", json={"username": username, "password": password}
    )


class TestLogin:
    """Tests for POST /api/v1/auth/login."""

    @pytest.mark.asyncio
    async def test_login_issues_token(self, jwt_client: AsyncClient) -> None:
        """Test that demo credentials return a bearer token."""
        response = await login(jwt_client)

        assert response.status_code == 200
        data = response.json()
        assert data["token"]
        assert data["tokenType"] == "Bearer"
        assert data["expiresAt"]

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, jwt_client: AsyncClient) -> None:
        """Test that bad credentials get 401."""
        response = await login(jwt_client, password="nope")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "INVALID_CREDENTIALS"


class TestBearerAuth:
    """Tests for protected endpoints in JWT mode."""

    @pytest.mark.asyncio
    async def test_token_grants_access(self, jwt_client: AsyncClient) -> None:
        """Test that the issued token opens the book listing."""
        token = (await login(jwt_client)).json()["token"]

        response = await jwt_client.get(
            "/api/v2/books", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 200
        assert response.json()["totalCount"] == 12

    @pytest.mark.asyncio
    async def test_missing_token(self, jwt_client: AsyncClient) -> None:
        """Test that no Authorization header gets 401."""
        response = await jwt_client.get("/api/v2/books")

        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Missing bearer token"

    @pytest.mark.asyncio
    async def test_invalid_token(self, jwt_client: AsyncClient) -> None:
        """Test that a forged token gets 401."""
        response = await jwt_client.get(
            "/api/v2/books", headers={"Authorization": "Bearer not-a-real-token"}
        )

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "INVALID_TOKEN"

    @pytest.mark.asyncio
    async def test_api_key_not_accepted_in_jwt_mode(
        self, jwt_client: AsyncClient, test_settings: Settings
    ) -> None:
        """Test that the API key header does not bypass JWT mode."""
        response = await jwt_client.get(
            "/api/v2/books",
            headers={"X-API-Key": test_settings.api_key.get_secret_value()},
        )
        assert response.status_code == 401
