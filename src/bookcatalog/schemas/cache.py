"""Schemas for the cache diagnostic endpoints."""

from typing import Any

from pydantic import BaseModel, Field


class CacheTestResponse(BaseModel):
    """Result of a set-then-get round through the cache."""

    success: bool
    message: str
    key: str
    cached_value: Any = Field(None, description="Value read back from the cache")
    expiration_seconds: float


class CacheValueResponse(BaseModel):
    """A raw cache entry."""

    success: bool = True
    key: str
    value: Any


class CacheRemovalResponse(BaseModel):
    """Outcome of a key or pattern removal."""

    success: bool = True
    message: str
    key: str | None = None
    pattern: str | None = None
    removed: int | None = Field(None, description="Keys removed (pattern only)")
