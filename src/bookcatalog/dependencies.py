"""FastAPI dependency injection container.

Application-scoped instances (settings, repository, cache, book service)
are created by ``create_app()`` and stored on ``app.state``; the functions
here hand them to route handlers. Override them with
``app.dependency_overrides`` in tests.
"""

import secrets
from typing import Annotated

from fastapi import Depends, Header, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from bookcatalog.config import AuthMode, Settings
from bookcatalog.core.exceptions import AuthenticationError
from bookcatalog.core.security import decode_access_token
from bookcatalog.services.books import BookService
from bookcatalog.services.cache import CacheService

bearer_scheme = HTTPBearer(auto_error=False)


# ========================================
# Application State Dependencies
# ========================================
def get_settings_from_request(request: Request) -> Settings:
    """Get the settings the application was created with."""
    return request.app.state.settings


def get_book_service(request: Request) -> BookService:
    """Get the application's BookService."""
    return request.app.state.book_service


def get_cache_service(request: Request) -> CacheService:
    """Get the application's cache backend."""
    return request.app.state.cache


SettingsDep = Annotated[Settings, Depends(get_settings_from_request)]
BookServiceDep = Annotated[BookService, Depends(get_book_service)]
CacheServiceDep = Annotated[CacheService, Depends(get_cache_service)]


# ========================================
# Auth Dependencies
# ========================================
async def require_auth(
    settings: SettingsDep,
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ] = None,
    x_api_key: Annotated[str | None, Header()] = None,
) -> str:
    """Authenticate the caller.

    ``AUTH_MODE=jwt`` expects ``Authorization: Bearer <token>``;
    ``AUTH_MODE=api_key`` expects the ``X-API-Key`` header.

    Raises:
        AuthenticationError: If credentials are missing or wrong
        InvalidTokenError: If the bearer token is invalid or expired

    Returns:
        The authenticated principal (token subject or "api-key")
    """
    if settings.auth_mode == AuthMode.API_KEY:
        expected = settings.api_key.get_secret_value()
        if x_api_key and secrets.compare_digest(x_api_key.encode(), expected.encode()):
            return "api-key"
        raise AuthenticationError(message="Missing or invalid API key")

    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthenticationError(message="Missing bearer token")
    payload = decode_access_token(credentials.credentials, settings)
    return payload["sub"]

