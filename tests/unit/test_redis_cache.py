"""CacheService tests against a mocked redis.asyncio client."""

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock

import pytest
import redis.asyncio as redis

from permgraph.application.services import PermissionCache
from permgraph.core.config import Settings
from permgraph.domain.enums import CacheMode
from permgraph.domain.exceptions import CacheUnavailableException
from permgraph.infrastructure.cache import CacheService


def _client() -> MagicMock:
    client = MagicMock()
    client.get = AsyncMock(return_value=None)
    client.setex = AsyncMock(return_value=True)
    client.delete = AsyncMock(return_value=1)
    client.aclose = AsyncMock()
    return client


async def test_get_deserializes_json() -> None:
    client = _client()
    client.get = AsyncMock(return_value=json.dumps({"computed_at": 1.0}))
    service = CacheService(redis_client=client, settings=Settings())
    assert await service.get("permission:v1:U1") == {"computed_at": 1.0}


async def test_set_uses_setex_with_ttl() -> None:
    client = _client()
    service = CacheService(redis_client=client, settings=Settings())
    assert await service.set("permission:v1:U1", {"a": 1}, ttl=172800)
    client.setex.assert_awaited_once_with("permission:v1:U1", 172800, json.dumps({"a": 1}))


async def test_redis_error_is_reported_as_miss() -> None:
    client = _client()
    client.get = AsyncMock(side_effect=redis.ResponseError("WRONGTYPE"))
    service = CacheService(redis_client=client, settings=Settings())
    assert await service.get("permission:v1:U1") is None


async def test_unavailable_without_client() -> None:
    service = CacheService(settings=Settings())
    assert not service.is_available()
    assert await service.get("k") is None
    assert not await service.set("k", 1)
    assert await service.delete_pattern("permission:v1:*") == 0


async def test_delete_pattern_unlinks_scanned_keys() -> None:
    client = _client()

    async def scan_iter(match: str):
        for key in ("permission:v1:U1", "permission:v1:U2"):
            yield key

    pipe = MagicMock()
    pipe.execute = AsyncMock(return_value=[2])
    pipeline_cm = MagicMock()
    pipeline_cm.__aenter__ = AsyncMock(return_value=pipe)
    pipeline_cm.__aexit__ = AsyncMock(return_value=False)
    client.scan_iter = scan_iter
    client.pipeline = MagicMock(return_value=pipeline_cm)

    service = CacheService(redis_client=client, settings=Settings())
    assert await service.delete_pattern("permission:v1:*") == 2
    pipe.unlink.assert_called_once_with("permission:v1:U1", "permission:v1:U2")


async def test_raise_errors_surfaces_redis_error() -> None:
    client = _client()
    client.get = AsyncMock(side_effect=redis.ResponseError("WRONGTYPE"))
    service = CacheService(redis_client=client, settings=Settings(), raise_errors=True)
    with pytest.raises(CacheUnavailableException):
        await service.get("permission:v1:U1")


async def test_raise_errors_when_reconnect_fails() -> None:
    client = _client()
    client.setex = AsyncMock(side_effect=redis.ConnectionError("reset"))
    service = CacheService(redis_client=client, settings=Settings(), raise_errors=True)
    service._reconnect = AsyncMock(return_value=False)
    with pytest.raises(CacheUnavailableException):
        await service.set("permission:v1:U1", {"a": 1})


async def test_async_permission_cache_fails_fast_on_redis_error() -> None:
    """A store error in async mode raises at once instead of polling to the deadline."""
    client = _client()
    client.get = AsyncMock(side_effect=redis.ResponseError("WRONGTYPE"))
    service = CacheService(redis_client=client, settings=Settings(), raise_errors=True)
    engine = MagicMock()
    engine.compute = AsyncMock()
    permission_cache = PermissionCache(
        engine, service, mode=CacheMode.ASYNC, poll_interval=0.01, wait_timeout=30.0
    )
    with pytest.raises(CacheUnavailableException):
        await asyncio.wait_for(permission_cache.get("U1"), timeout=1.0)
    client.get.assert_awaited_once()
    engine.compute.assert_not_awaited()
