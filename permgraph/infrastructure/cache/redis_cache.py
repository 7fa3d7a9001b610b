"""Redis-backed keyed store for permission sets.

Shared by every process pointing at the same Redis. Values are JSON. A
connection or timeout error triggers one reconnect and retry. Any other
Redis error is logged and reported as a miss or failed write, so sync-mode
callers fall back to recomputation; with raise_errors (async mode) it
raises CacheUnavailableException instead.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import redis.asyncio as redis

from permgraph.core.config import Settings, get_settings
from permgraph.domain.exceptions import CacheUnavailableException

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Keys per UNLINK round-trip in delete_pattern
UNLINK_BATCH_SIZE = 500


async def _unlink(client: redis.Redis, keys: list[str]) -> int:
    async with client.pipeline(transaction=False) as pipe:
        pipe.unlink(*keys)
        results = await pipe.execute()
    return sum(int(r or 0) for r in results)


async def _unlink_matching(client: redis.Redis, pattern: str) -> int:
    """SCAN for pattern and UNLINK matches in batches (never KEYS, never blocking DEL)."""
    deleted = 0
    batch: list[str] = []
    async for key in client.scan_iter(match=pattern):
        batch.append(key)
        if len(batch) >= UNLINK_BATCH_SIZE:
            deleted += await _unlink(client, batch)
            batch = []
    if batch:
        deleted += await _unlink(client, batch)
    return deleted


class CacheService:
    """Async Redis keyed store with TTL.

    Call connect() at startup and disconnect() at shutdown. While Redis is
    unreachable every operation degrades to a miss or a no-op.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        settings: Settings | None = None,
        *,
        raise_errors: bool = False,
    ) -> None:
        """Initialize cache service.

        Args:
            redis_client: Optional Redis client for testing or DI.
            settings: Optional settings; defaults to get_settings().
            raise_errors: Raise CacheUnavailableException on Redis errors
                instead of degrading to a miss or a failed write.
        """
        self.redis = redis_client
        self.settings = settings or get_settings()
        self.raise_errors = raise_errors
        self._connected = redis_client is not None

    async def connect(self) -> None:
        """Open the Redis connection; on failure leave the store unavailable."""
        if self.redis is not None:
            return
        password = self.settings.redis_password
        client = redis.Redis(
            host=self.settings.redis_host,
            port=self.settings.redis_port,
            db=self.settings.redis_db,
            password=password.get_secret_value() if password else None,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_keepalive=True,
        )
        try:
            await client.ping()
        except (redis.ConnectionError, redis.TimeoutError) as e:
            logger.warning("Redis connection failed: %s. Permission cache store disabled.", e)
            await client.aclose()
            self._connected = False
            return
        self.redis = client
        self._connected = True
        logger.info(
            "Redis cache connected: %s:%s", self.settings.redis_host, self.settings.redis_port
        )

    async def disconnect(self) -> None:
        """Close Redis connection. Call on app shutdown."""
        if self.redis:
            await self.redis.aclose()
            self.redis = None
            self._connected = False
            logger.info("Redis cache disconnected")

    async def _reconnect(self) -> bool:
        if self.redis is not None:
            try:
                await self.redis.aclose()
            except redis.RedisError:
                logger.debug("Ignoring error while closing stale Redis connection")
        self.redis = None
        self._connected = False
        await self.connect()
        return self._connected

    def is_available(self) -> bool:
        """Return True if Redis is connected and usable."""
        return self._connected and self.redis is not None

    async def _run(
        self,
        op: str,
        key: str,
        call: Callable[[redis.Redis], Awaitable[T]],
        default: T,
    ) -> T:
        """Run call against Redis, reconnecting once if the connection dropped.

        Returns default on failure, or raises CacheUnavailableException when
        raise_errors is set.
        """
        if not self.is_available() or self.redis is None:
            return self._fail(op, key, default)
        try:
            return await call(self.redis)
        except (redis.ConnectionError, redis.TimeoutError):
            if not await self._reconnect() or self.redis is None:
                logger.warning("Cache %s unavailable for %s (Redis disconnected)", op, key)
                return self._fail(op, key, default)
            try:
                return await call(self.redis)
            except redis.RedisError as e:
                logger.exception("Cache %s error for %s after reconnect", op, key)
                return self._fail(op, key, default, e)
        except redis.RedisError as e:
            logger.exception("Cache %s error for %s", op, key)
            return self._fail(op, key, default, e)

    def _fail(self, op: str, key: str, default: T, error: Exception | None = None) -> T:
        if self.raise_errors:
            raise CacheUnavailableException(f"Cache {op} failed for {key}") from error
        return default

    async def get(self, key: str) -> Any | None:
        """Return the JSON-decoded value, or None if missing, undecodable, or unavailable."""
        raw = await self._run("get", key, lambda client: client.get(key), None)
        if raw is None:
            logger.debug("Cache MISS: %s", key)
            return None
        try:
            value = json.loads(raw)
        except json.JSONDecodeError:
            logger.info("Ignoring non-JSON cache value at %s", key)
            return None
        logger.debug("Cache HIT: %s", key)
        return value

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store value (JSON-serializable) with TTL in seconds. Returns True on success."""
        serialized = json.dumps(value)

        async def _setex(client: redis.Redis) -> bool:
            await client.setex(key, ttl, serialized)
            return True

        stored = await self._run("set", key, _setex, False)
        if stored:
            logger.debug("Cache SET: %s (TTL: %ss)", key, ttl)
        return stored

    async def delete(self, key: str) -> bool:
        """Remove key. Returns True if the delete reached Redis."""

        async def _delete(client: redis.Redis) -> bool:
            await client.delete(key)
            return True

        return await self._run("delete", key, _delete, False)

    async def delete_pattern(self, pattern: str) -> int:
        """Delete every key matching pattern (e.g. permission:v1:*). Returns count deleted."""
        deleted = await self._run(
            "delete_pattern", pattern, lambda client: _unlink_matching(client, pattern), 0
        )
        if deleted:
            logger.info("Cache INVALIDATE: %s (%s keys)", pattern, deleted)
        return deleted
