"""Background repopulation of the permission cache (async cache mode).

One worker runs per process. It listens for invalidation timestamps on
Redis pub/sub, records them on the PermissionCache, and recomputes every
principal's set from a single bulk edge fetch. Signals that arrive while a
refresh is running coalesce into one follow-up refresh. A refresh also
runs at startup, after resubscribing, and every refresh_interval seconds
so entries are replaced before their TTL runs out.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable

from permgraph.application.interfaces.repositories import IPrincipalDirectory
from permgraph.application.services.permission_cache import PermissionCache
from permgraph.infrastructure.messaging.redis_pubsub import InvalidationSubscriber
from permgraph.shared.telemetry.tracing import traced
from permgraph.shared.utils.datetime import utc_timestamp

logger = logging.getLogger(__name__)


class PermissionRefreshWorker:
    """Consumes invalidation signals and repopulates the permission cache."""

    def __init__(
        self,
        permission_cache: PermissionCache,
        principal_directory: IPrincipalDirectory,
        subscriber: InvalidationSubscriber | None = None,
        *,
        refresh_interval: float = 3600.0,
        resubscribe_delay: float = 5.0,
        max_resubscribe_delay: float = 60.0,
        clock: Callable[[], float] = utc_timestamp,
    ) -> None:
        self.permission_cache = permission_cache
        self.principal_directory = principal_directory
        self.subscriber = subscriber
        self.refresh_interval = refresh_interval
        self.resubscribe_delay = resubscribe_delay
        self.max_resubscribe_delay = max_resubscribe_delay
        self._clock = clock
        self._wakeup = asyncio.Event()

    def notify(self, timestamp: float) -> None:
        """Record an invalidation and schedule a refresh (coalesced)."""
        self.permission_cache.observe_invalidation(timestamp)
        self._wakeup.set()

    @property
    def refresh_pending(self) -> bool:
        """True when a signal arrived that no refresh has consumed yet."""
        return self._wakeup.is_set()

    @traced("permissions.refresh_all")
    async def refresh(self) -> int:
        """Recompute and store every principal's set. Returns the number stored."""
        # Edges read below reflect every invalidation observed up to now.
        computed_at = max(self._clock(), self.permission_cache.latest_invalidation)
        started = time.monotonic()
        principal_ids = await self.principal_directory.list_principal_ids()
        permission_sets = await self.permission_cache.engine.compute_all(principal_ids)
        for principal_id, permissions in permission_sets.items():
            await self.permission_cache.store(principal_id, permissions, computed_at)
        logger.info(
            "Refreshed permissions for %s principals in %.3fs",
            len(permission_sets),
            time.monotonic() - started,
        )
        return len(permission_sets)

    async def run_refresh_loop(self) -> None:
        """Refresh whenever notified, or every refresh_interval seconds. Runs until cancelled."""
        while True:
            try:
                await asyncio.wait_for(self._wakeup.wait(), timeout=self.refresh_interval)
            except TimeoutError:
                logger.debug("Periodic permission refresh")
            self._wakeup.clear()
            try:
                await self.refresh()
            except Exception:
                logger.exception("Permission refresh failed; will retry on next signal")

    async def run_listener(self) -> None:
        """Forward invalidation timestamps from Redis to notify(). Runs until cancelled."""
        if self.subscriber is None:
            return
        missed_signals = False
        delay = self.resubscribe_delay
        while True:
            await self.subscriber.connect()
            if not self.subscriber.is_available():
                missed_signals = True
                logger.warning("Invalidation channel unavailable; retrying in %.1fs", delay)
                await asyncio.sleep(delay)
                delay = min(max(delay * 2, self.resubscribe_delay), self.max_resubscribe_delay)
                continue
            delay = self.resubscribe_delay
            if missed_signals:
                # Signals may have been missed while unsubscribed.
                self._wakeup.set()
                missed_signals = False
            try:
                async for timestamp in self.subscriber.subscribe():
                    self.notify(timestamp)
            except Exception:
                logger.exception("Invalidation subscription error")
            missed_signals = True
            logger.warning(
                "Invalidation subscription ended; resubscribing in %.1fs",
                self.resubscribe_delay,
            )
            await asyncio.sleep(self.resubscribe_delay)

    async def run(self) -> None:
        """Run until cancelled: initial refresh, then signal-driven and periodic refreshes."""
        self._wakeup.set()
        tasks = [asyncio.create_task(self.run_refresh_loop())]
        if self.subscriber is not None:
            tasks.append(asyncio.create_task(self.run_listener()))
        try:
            await asyncio.gather(*tasks)
        finally:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            logger.info("Permission refresh worker stopped")
