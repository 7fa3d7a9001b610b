"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic (SRP). Used by main.py;
no business logic here, only wiring of infrastructure (cache store,
invalidation channel, permission cache, refresh worker, DB engine dispose).
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from permgraph.application.services import (
    AuthorizationService,
    PermissionCache,
    PermissionEngine,
)
from permgraph.application.interfaces import ICacheService
from permgraph.core.config import get_settings
from permgraph.domain.enums import CacheMode
from permgraph.infrastructure.cache import CacheService, InMemoryCache
from permgraph.infrastructure.messaging import InvalidationPublisher, InvalidationSubscriber
from permgraph.infrastructure.persistence.repositories import (
    SessionEdgeStore,
    SessionPrincipalDirectory,
)
from permgraph.infrastructure.services import PermissionRefreshWorker
from permgraph.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: logging, cache store (Redis if enabled, else in-process),
    invalidation publisher (async mode), permission cache and authorization
    service, refresh worker (async mode). Shutdown order: worker cancel,
    publisher and cache disconnect, SQL engine dispose.
    """
    settings = get_settings()
    setup_logging()

    # ---- Startup ----
    mode = CacheMode(settings.permission_cache_mode)
    cache: ICacheService
    if settings.redis_enabled:
        # Async mode: store errors raise CacheUnavailableException instead of missing.
        redis_cache = CacheService(settings=settings, raise_errors=mode is CacheMode.ASYNC)
        await redis_cache.connect()
        cache = redis_cache
    else:
        cache = InMemoryCache()
    app.state.cache = cache

    publisher = None
    if mode is CacheMode.ASYNC:
        publisher = InvalidationPublisher(settings=settings)
        await publisher.connect()
    app.state.invalidation_publisher = publisher

    edge_store = SessionEdgeStore()
    principal_directory = SessionPrincipalDirectory()
    permission_cache = PermissionCache.from_settings(
        settings, PermissionEngine(edge_store), cache, publisher
    )
    app.state.permission_cache = permission_cache
    app.state.principal_directory = principal_directory
    app.state.authorization_service = AuthorizationService(permission_cache, edge_store)

    app.state.permission_refresh_task = None
    if mode is CacheMode.ASYNC:
        worker = PermissionRefreshWorker(
            permission_cache,
            principal_directory,
            InvalidationSubscriber(settings=settings),
            refresh_interval=settings.permission_refresh_interval,
        )
        app.state.permission_refresh_task = asyncio.create_task(worker.run())
    logger.info("Permission cache ready (mode=%s)", mode.value)

    yield

    # ---- Shutdown ----
    refresh_task = getattr(app.state, "permission_refresh_task", None)
    if refresh_task is not None:
        refresh_task.cancel()
        try:
            await refresh_task
        except asyncio.CancelledError:
            pass
        logger.info("Permission refresh worker task stopped")

    if getattr(app.state, "invalidation_publisher", None) is not None:
        await app.state.invalidation_publisher.disconnect()

    if isinstance(getattr(app.state, "cache", None), CacheService):
        await app.state.cache.disconnect()
        logger.info("Cache disconnected")

    from permgraph.infrastructure.persistence import database

    if getattr(database, "engine", None) is not None:
        await database.engine.dispose()
        logger.info("Database engine disposed")
