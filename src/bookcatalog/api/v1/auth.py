"""Authentication endpoints."""

from fastapi import APIRouter, status

from bookcatalog.core.exceptions import InvalidCredentialsError
from bookcatalog.core.logging import get_logger
from bookcatalog.core.security import create_access_token, verify_credentials
from bookcatalog.dependencies import SettingsDep
from bookcatalog.schemas.auth import LoginRequest, TokenResponse
from bookcatalog.schemas.common import ErrorResponse

logger = get_logger(__name__)

router = APIRouter()


@router.post(
    "/login",
    response_model=TokenResponse,
    status_code=status.HTTP_200_OK,
    summary="Log in",
    description="Exchange the demo credentials for a bearer token.",
    responses={
        200: {"description": "Token issued"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
    },
)
async def login(credentials: LoginRequest, settings: SettingsDep) -> TokenResponse:
    """Issue a JWT for the demo user."""
    if not verify_credentials(credentials.username, credentials.password, settings):
        logger.warning("login_failed", username=credentials.username)
        raise InvalidCredentialsError()

    token, expires_at = create_access_token(credentials.username, settings)
    logger.info("login_succeeded", username=credentials.username)
    return TokenResponse(token=token, token_type="Bearer", expires_at=expires_at)
