"""
Tests for the Redis get-or-populate cache.
"""

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import fakeredis
from redis.exceptions import ConnectionError as RedisConnectionError

from superfarmer.core.cache import Cache, discard_pending, flush_invalidations, invalidate_on_commit


def _cache() -> Cache:
    client = fakeredis.FakeAsyncRedis(server=fakeredis.FakeServer(), decode_responses=True)
    return Cache(client, prefix="unit", ttl=240)


def test_get_or_set_calls_loader_once():
    cache = _cache()
    loader = AsyncMock(return_value={"data": [1, 2, 3]})

    async def scenario():
        first = await cache.get_or_set("prices:list", loader)
        second = await cache.get_or_set("prices:list", loader)
        return first, second

    first, second = asyncio.run(scenario())
    assert first == second == {"data": [1, 2, 3]}
    loader.assert_awaited_once()


def test_values_expire_with_fixed_ttl():
    cache = _cache()

    async def scenario():
        await cache.set("k", "v")
        return await cache.redis.ttl("unit:k")

    assert 0 < asyncio.run(scenario()) <= 240


def test_delete_pattern_only_touches_namespace():
    cache = _cache()

    async def scenario():
        await cache.set("prices:list:1", 1)
        await cache.set("prices:history:a:1", 2)
        await cache.set("commodities:list:1", 3)
        removed = await cache.delete_pattern("prices")
        return removed, await cache.get("prices:list:1"), await cache.get("commodities:list:1")

    removed, price, commodity = asyncio.run(scenario())
    assert removed == 2
    assert price is None
    assert commodity == 3


def test_redis_failure_degrades_to_loader():
    client = MagicMock()
    client.get = AsyncMock(side_effect=RedisConnectionError("down"))
    client.set = AsyncMock(side_effect=RedisConnectionError("down"))
    cache = Cache(client, prefix="unit")
    loader = AsyncMock(return_value=[1])

    assert asyncio.run(cache.get_or_set("x", loader)) == [1]
    loader.assert_awaited_once()


def test_queued_invalidation_waits_for_flush():
    cache = _cache()
    session = SimpleNamespace(info={})

    async def scenario():
        await cache.set("prices:list:1", 1)
        invalidate_on_commit(session, cache, "prices")
        before = await cache.get("prices:list:1")
        await flush_invalidations(session)
        return before, await cache.get("prices:list:1")

    assert asyncio.run(scenario()) == (1, None)


def test_discarded_invalidation_keeps_cached_values():
    cache = _cache()
    session = SimpleNamespace(info={})

    async def scenario():
        await cache.set("prices:list:1", 1)
        invalidate_on_commit(session, cache, "prices")
        discard_pending(session)
        await flush_invalidations(session)
        return await cache.get("prices:list:1")

    assert asyncio.run(scenario()) == 1
