"""Cache diagnostic endpoints.

Version-neutral helpers for inspecting and clearing the cache by hand,
e.g. ``DELETE /api/cache/remove-pattern?pattern=books:*``.
"""

from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Query, status
from fastapi.responses import JSONResponse

from bookcatalog.core.exceptions import CacheKeyNotFoundError
from bookcatalog.core.logging import get_logger
from bookcatalog.dependencies import CacheServiceDep
from bookcatalog.schemas.cache import (
    CacheRemovalResponse,
    CacheTestResponse,
    CacheValueResponse,
)
from bookcatalog.schemas.common import ErrorResponse

logger = get_logger(__name__)

router = APIRouter()


@router.post(
    "/test",
    response_model=CacheTestResponse,
    summary="Round-trip a value through the cache",
    responses={400: {"model": CacheTestResponse, "description": "Value not readable"}},
)
async def cache_round_trip(
    cache: CacheServiceDep,
    key: Annotated[str, Query(min_length=1)] = "test:key",
    value: str = "test-value",
    expiration_seconds: Annotated[
        float, Query(alias="expirationSeconds", gt=0)
    ] = 30,
) -> CacheTestResponse | JSONResponse:
    """Set a value, read it straight back and report what came out."""
    await cache.set(
        key,
        {"message": value, "timestamp": datetime.now(UTC).isoformat()},
        expiration_seconds,
    )
    logger.info(
        "cache_test_set", cache_key=key, expiration_seconds=expiration_seconds
    )

    cached = await cache.get(key)
    if cached is None:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=CacheTestResponse(
                success=False,
                message="Failed to retrieve cached value",
                key=key,
                expiration_seconds=expiration_seconds,
            ).model_dump(),
        )

    return CacheTestResponse(
        success=True,
        message="Cache test successful",
        key=key,
        cached_value=cached,
        expiration_seconds=expiration_seconds,
    )


@router.get(
    "/get/{key:path}",
    response_model=CacheValueResponse,
    summary="Read a cache entry",
    responses={404: {"model": ErrorResponse, "description": "Missing or expired"}},
)
async def get_cache_value(key: str, cache: CacheServiceDep) -> CacheValueResponse:
    """Return the raw value stored under ``key``."""
    value = await cache.get(key)
    if value is None:
        raise CacheKeyNotFoundError(key)
    return CacheValueResponse(key=key, value=value)


@router.delete(
    "/remove/{key:path}",
    response_model=CacheRemovalResponse,
    summary="Remove a cache entry",
)
async def remove_cache_value(key: str, cache: CacheServiceDep) -> CacheRemovalResponse:
    """Remove ``key``; succeeds whether or not it existed."""
    await cache.invalidate(key)
    logger.info("cache_key_removed", cache_key=key)
    return CacheRemovalResponse(message=f"Cache key '{key}' removed", key=key)


@router.delete(
    "/remove-pattern",
    response_model=CacheRemovalResponse,
    summary="Remove cache entries by pattern",
    description="`*` matches any run of characters; matching ignores case.",
)
async def remove_cache_pattern(
    cache: CacheServiceDep,
    pattern: Annotated[str, Query(min_length=1)] = "books:*",
) -> CacheRemovalResponse:
    """Remove every key matching ``pattern``."""
    removed = await cache.invalidate_pattern(pattern)
    logger.info("cache_pattern_removed", pattern=pattern, removed=removed)
    return CacheRemovalResponse(
        message=f"Cache entries matching pattern '{pattern}' removed",
        pattern=pattern,
        removed=removed,
    )
