"""JWT token creation and validation.

Tokens are HS256-signed by default and carry the username as ``sub``.
"""

import secrets
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from bookcatalog.config import Settings
from bookcatalog.core.exceptions import InvalidTokenError


def create_access_token(subject: str, settings: Settings) -> tuple[str, datetime]:
    """Create a signed access token.

    Args:
        subject: Username the token is issued to
        settings: Application settings providing secret, algorithm and expiry

    Returns:
        Tuple of (encoded JWT, expiration datetime in UTC)
    """
    now = datetime.now(UTC)
    expires_at = now + timedelta(minutes=settings.jwt_expire_minutes)
    payload = {
        "sub": subject,
        "type": "access",
        "iat": now,
        "exp": expires_at,
    }
    token = jwt.encode(
        payload,
        settings.jwt_secret_key.get_secret_value(),
        algorithm=settings.jwt_algorithm,
    )
    return token, expires_at


def decode_access_token(token: str, settings: Settings) -> dict[str, Any]:
    """Decode and validate an access token.

    Raises:
        InvalidTokenError: If the signature, expiry or token type is invalid
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key.get_secret_value(),
            algorithms=[settings.jwt_algorithm],
        )
    except jwt.ExpiredSignatureError as e:
        raise InvalidTokenError(message="Token has expired") from e
    except jwt.PyJWTError as e:
        raise InvalidTokenError() from e

    if payload.get("type") != "access" or not payload.get("sub"):
        raise InvalidTokenError()
    return payload


def verify_credentials(username: str, password: str, settings: Settings) -> bool:
    """Check login credentials against the configured demo user."""
    user_ok = secrets.compare_digest(
        username.encode(), settings.demo_username.encode()
    )
    password_ok = secrets.compare_digest(
        password.encode(), settings.demo_password.get_secret_value().encode()
    )
    return user_ok and password_ok
