"""CacheService - key/value caching with absolute TTL and pattern invalidation.

Two backends share one async interface:

- MemoryCacheService: process-local dict, the default
- RedisCacheService: Redis, for deployments that want the cache outside
  the process

Values must be JSON-compatible (dicts, lists, strings, numbers). Callers
serialise their own objects; the cache never inspects what it stores.

Expiry is absolute: a TTL starts when ``set`` is called and reads never
extend it.

Pattern syntax:
    ``*`` matches zero or more characters; everything else is literal and
    matched case-insensitively against the whole key. ``"books:*"`` removes
    every key that starts with ``books:``.
"""

import asyncio
import json
import re
import threading
import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

import structlog
from redis.asyncio import Redis
from redis.exceptions import RedisError

from bookcatalog.config import CacheBackend, Settings
from bookcatalog.core.exceptions import InvalidCachePatternError

logger = structlog.get_logger(__name__)


@lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile a ``*`` wildcard pattern into a case-insensitive regex.

    Raises:
        InvalidCachePatternError: If ``pattern`` is not a non-empty string
    """
    if not isinstance(pattern, str) or not pattern:
        raise InvalidCachePatternError(pattern)
    regex = ".*".join(re.escape(part) for part in pattern.split("*"))
    return re.compile(regex, re.IGNORECASE | re.DOTALL)


class CacheService(ABC):
    """Async cache contract.

    Usage with FastAPI:
        ```python
        from bookcatalog.dependencies import CacheServiceDep

        @router.get("/get/{key}")
        async def get_value(key: str, cache: CacheServiceDep):
            value = await cache.get(key)
        ```
    """

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """Return the value stored under ``key``, or None on a miss.

        An entry is never returned at or after its expiry instant.
        """

    @abstractmethod
    async def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        """Store ``value`` under ``key``, replacing any previous entry.

        Args:
            key: Cache key
            value: JSON-compatible value
            ttl_seconds: Lifetime measured from this call
        """

    @abstractmethod
    async def invalidate(self, key: str) -> None:
        """Delete ``key`` if present; no-op otherwise."""

    @abstractmethod
    async def invalidate_pattern(self, pattern: str) -> int:
        """Delete every live key matching ``pattern``.

        Returns:
            Number of keys deleted

        Raises:
            InvalidCachePatternError: If the pattern is malformed
        """

    @abstractmethod
    async def keys(self) -> list[str]:
        """List live (unexpired) keys."""

    async def purge_expired(self) -> int:
        """Drop expired entries eagerly. Returns the number dropped."""
        return 0

    async def ping(self) -> bool:
        """Check that the backend is reachable."""
        return True

    async def close(self) -> None:
        """Release backend resources."""


# -----------------------------------------------------------------------------
# In-memory backend
# -----------------------------------------------------------------------------


@dataclass(slots=True)
class CacheEntry:
    """A stored value and the monotonic instant it expires at."""

    value: Any
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


class MemoryCacheService(CacheService):
    """Process-local cache.

    The entry map is also the key registry used for pattern matching, so
    removing or expiring an entry removes its key in the same step. Every
    operation runs under one lock; pattern removal matches and deletes in a
    single critical section, so a concurrent ``set`` lands either before
    (and is removed) or after (and survives).
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        """Initialize the cache.

        Args:
            clock: Monotonic time source in seconds (injectable for tests)
        """
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    async def get(self, key: str) -> Any | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.is_expired(self._clock()):
                del self._entries[key]
                logger.debug("cache_entry_expired", cache_key=key)
                return None
            return entry.value

    async def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        with self._lock:
            self._entries[key] = CacheEntry(value, self._clock() + ttl_seconds)
        logger.debug("cache_set", cache_key=key, ttl=ttl_seconds)

    async def invalidate(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)
        logger.debug("cache_invalidated", cache_key=key)

    async def invalidate_pattern(self, pattern: str) -> int:
        regex = compile_pattern(pattern)
        with self._lock:
            self._drop_expired()
            matched = [key for key in self._entries if regex.fullmatch(key)]
            for key in matched:
                del self._entries[key]
        logger.debug("cache_pattern_invalidated", pattern=pattern, count=len(matched))
        return len(matched)

    async def keys(self) -> list[str]:
        with self._lock:
            self._drop_expired()
            return list(self._entries)

    async def purge_expired(self) -> int:
        with self._lock:
            return self._drop_expired()

    def _drop_expired(self) -> int:
        # Caller must hold self._lock
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
        for key in expired:
            del self._entries[key]
        return len(expired)


# -----------------------------------------------------------------------------
# Redis backend
# -----------------------------------------------------------------------------


def escape_glob(text: str) -> str:
    """Escape Redis glob metacharacters so ``text`` matches literally."""
    return re.sub(r"([*?\[\]\\])", r"\\\1", text)


class RedisCacheService(CacheService):
    """Redis-backed cache.

    Keys are stored under ``namespace`` so pattern scans only touch this
    service's keys. Redis globs are case-sensitive, so pattern removal scans
    the namespace and filters with the same matcher as the memory backend.

    Redis failures are logged and degrade to a miss or a no-op; only a
    malformed pattern raises.
    """

    def __init__(self, redis: Redis, namespace: str = "") -> None:
        """Initialize the cache service.

        Args:
            redis: Async Redis client
            namespace: Prefix applied to every stored key
        """
        self.redis = redis
        self.namespace = namespace
        self._pattern_lock = asyncio.Lock()

    def _qualify(self, key: str) -> str:
        return f"{self.namespace}{key}"

    def _unqualify(self, raw: bytes | str) -> str:
        key = raw.decode() if isinstance(raw, bytes) else raw
        return key[len(self.namespace) :]

    async def get(self, key: str) -> Any | None:
        try:
            result = await self.redis.get(self._qualify(key))
            if result is None:
                return None
            return json.loads(result)
        except RedisError as e:
            logger.warning("cache_get_failed", cache_key=key, error=str(e))
            return None

    async def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        ttl_ms = max(1, int(ttl_seconds * 1000))
        try:
            await self.redis.set(self._qualify(key), json.dumps(value), px=ttl_ms)
            logger.debug("cache_set", cache_key=key, ttl=ttl_seconds)
        except RedisError as e:
            logger.warning("cache_set_failed", cache_key=key, error=str(e))

    async def invalidate(self, key: str) -> None:
        try:
            await self.redis.delete(self._qualify(key))
            logger.debug("cache_invalidated", cache_key=key)
        except RedisError as e:
            logger.warning("cache_invalidate_failed", cache_key=key, error=str(e))

    async def invalidate_pattern(self, pattern: str) -> int:
        regex = compile_pattern(pattern)
        async with self._pattern_lock:
            try:
                matched = [
                    raw
                    for raw in await self._scan_namespace()
                    if regex.fullmatch(self._unqualify(raw))
                ]
                if matched:
                    await self.redis.delete(*matched)
            except RedisError as e:
                logger.warning(
                    "cache_pattern_invalidate_failed", pattern=pattern, error=str(e)
                )
                return 0
        logger.debug("cache_pattern_invalidated", pattern=pattern, count=len(matched))
        return len(matched)

    async def keys(self) -> list[str]:
        try:
            return [self._unqualify(raw) for raw in await self._scan_namespace()]
        except RedisError as e:
            logger.warning("cache_keys_failed", error=str(e))
            return []

    async def ping(self) -> bool:
        try:
            return bool(await self.redis.ping())
        except RedisError as e:
            logger.warning("cache_ping_failed", error=str(e))
            return False

    async def close(self) -> None:
        await self.redis.aclose()

    async def _scan_namespace(self) -> list[bytes | str]:
        match = f"{escape_glob(self.namespace)}*"
        return [raw async for raw in self.redis.scan_iter(match=match)]


def create_cache_service(settings: Settings) -> CacheService:
    """Build the cache backend selected by ``settings.cache_backend``."""
    if settings.cache_backend == CacheBackend.REDIS:
        logger.info("cache_backend_selected", backend="redis")
        return RedisCacheService(
            Redis.from_url(settings.redis_url),
            namespace=settings.cache_namespace,
        )
    logger.info("cache_backend_selected", backend="memory")
    return MemoryCacheService()
