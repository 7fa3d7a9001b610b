"""Lifespan wiring: services placed on app.state and torn down on exit."""

import pytest
from fastapi import FastAPI

from permgraph.application.services import AuthorizationService, PermissionCache
from permgraph.core.config import get_settings
from permgraph.core.lifespan import create_lifespan
from permgraph.domain.enums import CacheMode
from permgraph.infrastructure.cache import InMemoryCache


@pytest.fixture
def sync_env(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("REDIS_ENABLED", "false")
    monkeypatch.setenv("PERMISSION_CACHE_MODE", "sync")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


async def test_sync_mode_without_redis_uses_in_process_cache(sync_env) -> None:
    app = FastAPI()
    async with create_lifespan(app):
        assert isinstance(app.state.cache, InMemoryCache)
        assert isinstance(app.state.permission_cache, PermissionCache)
        assert app.state.permission_cache.mode is CacheMode.SYNC
        assert isinstance(app.state.authorization_service, AuthorizationService)
        assert app.state.invalidation_publisher is None
        assert app.state.permission_refresh_task is None
