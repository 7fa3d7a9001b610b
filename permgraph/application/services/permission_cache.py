"""Per-principal permission cache with synchronous and asynchronous consistency modes.

Entries are stored as ``{"computed_at": <unix ts>, "permissions": {...}}``
under a versioned key. An entry counts as current only when computed at
or after the newest invalidation timestamp this process has observed.

Sync mode: a miss recomputes inline; invalidation deletes every entry.
If the cache store is down, every get() recomputes (slower, still correct).

Async mode: invalidation is broadcast and a background worker repopulates
entries; get() never recomputes, it polls until a current entry appears or
the wait deadline passes. A missing cache store is an error.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from permgraph.application.interfaces.services import ICacheService, IInvalidationPublisher
from permgraph.application.services.permission_engine import PermissionEngine
from permgraph.core.constants import DEFAULT_PERMISSION_CACHE_TTL
from permgraph.domain.enums import CacheMode, Capability
from permgraph.domain.exceptions import (
    CacheUnavailableException,
    PermissionCacheTimeoutException,
)
from permgraph.domain.value_objects import (
    PermissionSet,
    dump_permission_set,
    load_permission_set,
)
from permgraph.infrastructure.cache.keys import permission_key, permission_pattern
from permgraph.shared.utils.datetime import utc_timestamp

if TYPE_CHECKING:
    from permgraph.core.config import Settings

logger = logging.getLogger(__name__)


class PermissionCache:
    """Process-wide keyed store of PermissionSets, one entry per principal."""

    def __init__(
        self,
        engine: PermissionEngine,
        cache: ICacheService | None,
        *,
        mode: CacheMode = CacheMode.SYNC,
        ttl: int = DEFAULT_PERMISSION_CACHE_TTL,
        key_version: str = "v1",
        poll_interval: float = 0.1,
        wait_timeout: float = 30.0,
        publisher: IInvalidationPublisher | None = None,
        anonymous_group_id: str | None = None,
        clock: Callable[[], float] = utc_timestamp,
    ) -> None:
        self.engine = engine
        self.cache = cache
        self.mode = CacheMode(mode)
        self.ttl = ttl
        self.key_version = key_version
        self.poll_interval = poll_interval
        self.wait_timeout = wait_timeout
        self.publisher = publisher
        self.anonymous_group_id = anonymous_group_id
        self._clock = clock
        self._latest_invalidation = 0.0

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        engine: PermissionEngine,
        cache: ICacheService | None,
        publisher: IInvalidationPublisher | None = None,
    ) -> PermissionCache:
        """Build from application settings."""
        return cls(
            engine,
            cache,
            mode=CacheMode(settings.permission_cache_mode),
            ttl=settings.permission_cache_ttl,
            key_version=settings.permission_cache_key_version,
            poll_interval=settings.permission_poll_interval,
            wait_timeout=settings.permission_wait_timeout,
            publisher=publisher,
            anonymous_group_id=settings.anonymous_group_id,
        )

    @property
    def latest_invalidation(self) -> float:
        """Newest invalidation timestamp observed by this process."""
        return self._latest_invalidation

    def observe_invalidation(self, timestamp: float) -> float:
        """Record an invalidation timestamp; older timestamps never move it back."""
        if timestamp > self._latest_invalidation:
            self._latest_invalidation = timestamp
        return self._latest_invalidation

    def _cache_usable(self) -> bool:
        return self.cache is not None and self.cache.is_available()

    async def _read_entry(self, principal_id: str) -> PermissionSet | None:
        """Return the cached set if present, decodable, and not older than the last invalidation."""
        if self.cache is None or not self.cache.is_available():
            return None
        raw = await self.cache.get(permission_key(self.key_version, principal_id))
        if raw is None:
            return None
        try:
            computed_at = float(raw["computed_at"])
            permissions = load_permission_set(raw["permissions"])
        except (KeyError, TypeError, ValueError, AttributeError):
            logger.info("Ignoring undecodable permission entry for %s", principal_id)
            return None
        if computed_at < self._latest_invalidation:
            logger.debug(
                "Stale permission entry for %s (computed %.3f < invalidated %.3f)",
                principal_id,
                computed_at,
                self._latest_invalidation,
            )
            return None
        return permissions

    async def get(self, principal_id: str) -> PermissionSet:
        """Return the principal's PermissionSet.

        Raises:
            EdgeStoreUnavailableException: Sync mode, recomputation failed.
            CacheUnavailableException: Async mode, cache store unreachable.
            PermissionCacheTimeoutException: Async mode, wait deadline passed.
        """
        if self.mode is CacheMode.SYNC:
            cached = await self._read_entry(principal_id)
            if cached is not None:
                return cached
            return await self.recompute(principal_id)
        return await self._wait_for_entry(principal_id)

    async def _wait_for_entry(self, principal_id: str) -> PermissionSet:
        loop = asyncio.get_running_loop()
        started = loop.time()
        deadline = started + self.wait_timeout
        while True:
            if not self._cache_usable():
                raise CacheUnavailableException()
            permissions = await self._read_entry(principal_id)
            if permissions is not None:
                return permissions
            now = loop.time()
            if now >= deadline:
                logger.warning(
                    "Gave up waiting for permissions of %s after %.2fs",
                    principal_id,
                    now - started,
                )
                raise PermissionCacheTimeoutException(principal_id, now - started)
            await asyncio.sleep(min(self.poll_interval, deadline - now))

    async def recompute(self, principal_id: str) -> PermissionSet:
        """Compute the principal's set from the edge store and store it."""
        # Edges read after this point reflect every invalidation observed so far.
        computed_at = max(self._clock(), self._latest_invalidation)
        permissions = await self.engine.compute(principal_id)
        await self.store(principal_id, permissions, computed_at)
        return permissions

    async def store(
        self, principal_id: str, permissions: PermissionSet, computed_at: float
    ) -> bool:
        """Write an entry with TTL. Returns False when the cache store is unavailable."""
        if self.cache is None or not self.cache.is_available():
            return False
        entry = {
            "computed_at": computed_at,
            "permissions": dump_permission_set(permissions),
        }
        return await self.cache.set(
            permission_key(self.key_version, principal_id), entry, ttl=self.ttl
        )

    async def invalidate(self, timestamp: float | None = None) -> float:
        """Mark every cached PermissionSet older than timestamp as stale.

        Returns the timestamp used.

        Raises:
            CacheUnavailableException: Async mode, no channel or broadcast failed.
        """
        if timestamp is None:
            timestamp = self._clock()
        self.observe_invalidation(timestamp)
        if self.mode is CacheMode.SYNC:
            if self._cache_usable():
                deleted = await self.cache.delete_pattern(permission_pattern(self.key_version))
                logger.info("Permission cache invalidated (%s entries dropped)", deleted)
            return timestamp
        if self.publisher is None:
            raise CacheUnavailableException("Permission invalidation channel not configured")
        if not await self.publisher.publish(timestamp):
            raise CacheUnavailableException("Permission invalidation broadcast failed")
        logger.info("Permission invalidation broadcast at %.3f", timestamp)
        return timestamp

    async def groups_i_can(self, principal_id: str, action: str) -> list[str]:
        """Return ids in the principal's set whose mask grants action.

        For read, the anonymous group (when configured) is always included.
        """
        permissions = await self.get(principal_id)
        group_ids = [node_id for node_id, mask in permissions.items() if mask.grants(action)]
        if action == Capability.READ.value and self.anonymous_group_id:
            group_ids.append(self.anonymous_group_id)
        return group_ids
