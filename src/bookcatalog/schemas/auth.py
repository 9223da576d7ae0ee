"""Authentication request/response schemas."""

from datetime import datetime

from pydantic import Field

from bookcatalog.schemas.common import CamelSchema


class LoginRequest(CamelSchema):
    """Credentials for the demo login endpoint."""

    username: str = Field(..., min_length=1, json_schema_extra={"example": "elif"})
    password: str = Field(..., min_length=1, json_schema_extra={"example": "1234"})


class TokenResponse(CamelSchema):
    """Issued bearer token."""

    token: str = Field(..., description="Signed JWT")
    token_type: str = Field("Bearer", description="Authorization scheme")
    expires_at: datetime = Field(..., description="Expiry instant (UTC)")
