"""In-process cache store with per-key TTL.

Same contract as CacheService (JSON round-trip, glob delete) for single
process deployments and tests. Values are stored JSON-encoded so callers
get copies, never shared mutable objects.
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable
from fnmatch import fnmatchcase
from typing import Any

logger = logging.getLogger(__name__)


class InMemoryCache:
    """Dict-backed cache; expired keys are dropped lazily on access."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._entries: dict[str, tuple[float, str]] = {}
        self._available = True
        self._clock = clock

    def is_available(self) -> bool:
        """Return True unless the cache was marked unavailable."""
        return self._available

    def set_available(self, available: bool) -> None:
        """Toggle availability (simulates an outage)."""
        self._available = available

    async def get(self, key: str) -> Any | None:
        """Return cached value or None if missing, expired, or unavailable."""
        if not self._available:
            return None
        entry = self._entries.get(key)
        if entry is None:
            logger.debug("Cache MISS: %s", key)
            return None
        expires_at, serialized = entry
        if expires_at <= self._clock():
            del self._entries[key]
            logger.debug("Cache EXPIRED: %s", key)
            return None
        logger.debug("Cache HIT: %s", key)
        return json.loads(serialized)

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store value with TTL. Returns True on success."""
        if not self._available:
            return False
        self._entries[key] = (self._clock() + ttl, json.dumps(value))
        logger.debug("Cache SET: %s (TTL: %ss)", key, ttl)
        return True

    async def delete(self, key: str) -> bool:
        """Remove key. Returns True if the cache was available."""
        if not self._available:
            return False
        self._entries.pop(key, None)
        return True

    async def delete_pattern(self, pattern: str) -> int:
        """Delete all keys matching a glob pattern. Returns number deleted."""
        if not self._available:
            return 0
        matched = [key for key in self._entries if fnmatchcase(key, pattern)]
        for key in matched:
            del self._entries[key]
        if matched:
            logger.info("Cache INVALIDATE: %s (%s keys)", pattern, len(matched))
        return len(matched)
