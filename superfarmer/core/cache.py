"""Redis get-or-populate cache.

Values are stored as JSON strings under `{prefix}:{key}`. Redis being down
never fails a request: errors are logged and treated as a cache miss.

Writes queue their namespaces on the session; `get_db` clears them only
after the commit.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any, Optional

from redis.asyncio import Redis, from_url
from redis.exceptions import RedisError
from sqlalchemy.ext.asyncio import AsyncSession

from superfarmer.core.config import settings

logger = logging.getLogger(__name__)


class Cache:
    def __init__(
        self,
        client: Optional[Redis] = None,
        prefix: str = settings.cache_prefix,
        ttl: int = settings.cache_ttl_seconds,
    ) -> None:
        self._redis = client
        self.prefix = prefix
        self.ttl = ttl

    @property
    def redis(self) -> Redis:
        if self._redis is None:
            logger.info("Connecting to Redis at %s", settings.redis_url)
            self._redis = from_url(settings.redis_url, decode_responses=True)
        return self._redis

    async def close(self) -> None:
        if self._redis is not None:
            await self._redis.aclose()
            self._redis = None

    def _key(self, key: str) -> str:
        return f"{self.prefix}:{key}"

    async def get(self, key: str) -> Any | None:
        try:
            raw = await self.redis.get(self._key(key))
        except RedisError as exc:
            logger.warning("Cache get failed for %s: %s", key, exc)
            return None
        if raw is None:
            return None
        logger.debug("Cache hit for %s", key)
        return json.loads(raw)

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        try:
            await self.redis.set(self._key(key), json.dumps(value), ex=ttl or self.ttl)
        except RedisError as exc:
            logger.warning("Cache set failed for %s: %s", key, exc)

    async def delete(self, key: str) -> None:
        try:
            await self.redis.delete(self._key(key))
        except RedisError as exc:
            logger.warning("Cache delete failed for %s: %s", key, exc)

    async def delete_pattern(self, namespace: str) -> int:
        """Delete every key under `{prefix}:{namespace}`. Returns the number removed."""
        removed = 0
        try:
            async for key in self.redis.scan_iter(match=f"{self._key(namespace)}*"):
                removed += await self.redis.delete(key)
        except RedisError as exc:
            logger.warning("Cache invalidation failed for %s: %s", namespace, exc)
        return removed

    async def get_or_set(
        self,
        key: str,
        loader: Callable[[], Awaitable[Any]],
        ttl: int | None = None,
    ) -> Any:
        """Return the cached value for `key`, or await `loader()` and cache its result."""
        cached = await self.get(key)
        if cached is not None:
            return cached
        value = await loader()
        await self.set(key, value, ttl)
        return value


cache = Cache()


async def get_cache() -> Cache:
    """FastAPI dependency; tests override it with a fakeredis-backed Cache."""
    return cache


# ---------------------------------------------------------------------------
# Commit-time invalidation
# ---------------------------------------------------------------------------
_PENDING_KEY = "cache_invalidations"


def invalidate_on_commit(session: AsyncSession, cache: Cache, namespace: str) -> None:
    """Queue `namespace` to be cleared once `session` commits."""
    session.info.setdefault(_PENDING_KEY, set()).add((cache, namespace))


def discard_pending(session: AsyncSession) -> None:
    session.info.pop(_PENDING_KEY, None)


async def flush_invalidations(session: AsyncSession) -> None:
    """Clear every namespace queued on `session`. Call only after a successful commit."""
    for cache, namespace in session.info.pop(_PENDING_KEY, set()):
        removed = await cache.delete_pattern(namespace)
        logger.debug("Invalidated %d %s cache keys", removed, namespace)
