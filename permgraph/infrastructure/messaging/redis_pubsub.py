"""Redis Pub/Sub for permission cache invalidation signals.

Any process may publish an invalidation timestamp; every process running
the refresh worker subscribes and treats receipt as "cache entries older
than timestamp are stale". Payload is JSON ``{"timestamp": <unix ts>}``.
"""

from __future__ import annotations

import json
import logging
from collections.abc import AsyncIterator
from typing import Any

import redis.asyncio as redis

from permgraph.core.config import Settings, get_settings

logger = logging.getLogger(__name__)


def encode_invalidation(timestamp: float) -> str:
    """Serialize an invalidation timestamp for publish."""
    return json.dumps({"timestamp": timestamp})


def decode_invalidation(data: Any) -> float:
    """Parse a published payload back to a timestamp.

    Raises:
        ValueError: If the payload is not a JSON object with a numeric timestamp.
    """
    if isinstance(data, bytes):
        data = data.decode()
    try:
        payload = json.loads(data)
        timestamp = float(payload["timestamp"])
    except (json.JSONDecodeError, KeyError, TypeError) as e:
        raise ValueError(f"Malformed invalidation payload: {data!r}") from e
    return timestamp


class _RedisPubSubBase:
    """Shared Redis connection and channel logic for invalidation pub/sub."""

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize. Pass redis_client for DI/testing."""
        self.redis = redis_client
        self.settings = settings or get_settings()
        self.channel = self.settings.invalidation_channel
        self._connected = redis_client is not None

    async def connect(self) -> None:
        """Establish (or re-check) the Redis connection. Call on app startup."""
        if self._connected:
            return
        password = self.settings.redis_password
        client = self.redis or redis.Redis(
            host=self.settings.redis_host,
            port=self.settings.redis_port,
            db=self.settings.redis_db,
            password=password.get_secret_value() if password else None,
            decode_responses=True,
            socket_connect_timeout=5,
        )
        self.redis = client
        try:
            await client.ping()
        except (redis.ConnectionError, redis.TimeoutError) as e:
            logger.warning("Redis pub/sub connection failed: %s", e)
            self._connected = False
            return
        self._connected = True
        logger.info("Redis pub/sub connected")

    async def disconnect(self) -> None:
        """Close Redis connection. Call on app shutdown."""
        if self.redis:
            await self.redis.aclose()
            self.redis = None
            self._connected = False
            logger.info("Redis pub/sub disconnected")

    def is_available(self) -> bool:
        """Return True if Redis is connected."""
        return self._connected and self.redis is not None


class InvalidationPublisher(_RedisPubSubBase):
    """Publishes invalidation timestamps to every subscribed process."""

    async def publish(self, timestamp: float) -> bool:
        """Publish an invalidation timestamp.

        Args:
            timestamp: UNIX timestamp; entries computed before it are stale.

        Returns:
            True if published, False if Redis unavailable or publish failed.
        """
        if not self.is_available() or self.redis is None:
            logger.warning("Redis not available, invalidation not published")
            return False
        try:
            receivers = await self.redis.publish(self.channel, encode_invalidation(timestamp))
            logger.debug(
                "Published invalidation %.3f to %s (%s receivers)",
                timestamp,
                self.channel,
                receivers,
            )
        except redis.RedisError:
            logger.exception("Failed to publish permission invalidation")
            return False
        else:
            return True


class InvalidationSubscriber(_RedisPubSubBase):
    """Subscribes to invalidation timestamps.

    subscribe() is reentrant: each call uses a locally-scoped PubSub that is
    closed in finally. Losing the connection marks the subscriber
    unavailable until the next successful connect().
    """

    async def subscribe(self) -> AsyncIterator[float]:
        """Yield invalidation timestamps as they arrive. Malformed messages are skipped."""
        if not self.is_available() or self.redis is None:
            logger.warning("Redis not available for invalidation subscription")
            return
        pubsub = self.redis.pubsub()
        try:
            await pubsub.subscribe(self.channel)
            logger.info("Subscribed to %s", self.channel)
            async for message in pubsub.listen():
                if message["type"] != "message":
                    continue
                try:
                    yield decode_invalidation(message["data"])
                except ValueError:
                    logger.exception("Failed to parse invalidation message")
        except (redis.ConnectionError, redis.TimeoutError):
            self._connected = False
            raise
        finally:
            try:
                await pubsub.unsubscribe(self.channel)
            except redis.RedisError:
                logger.debug("Ignoring error while unsubscribing from %s", self.channel)
            await pubsub.aclose()
            logger.info("Unsubscribed from %s", self.channel)
