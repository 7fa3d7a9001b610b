"""Health check endpoints; used for liveness and readiness probes."""

from typing import Annotated

from fastapi import APIRouter, Depends

from permgraph.api.v1.dependencies import get_permission_cache
from permgraph.application.services import PermissionCache
from permgraph.schemas.health import HealthResponse, ReadinessResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get("/ready", response_model=ReadinessResponse)
def readiness_check(
    permission_cache: Annotated[PermissionCache, Depends(get_permission_cache)],
) -> ReadinessResponse:
    """Report the cache mode and whether the cache store is reachable.

    In sync mode an unreachable store only slows requests down, so the
    status stays ok; in async mode no request can be answered without it.
    """
    cache = permission_cache.cache
    available = cache is not None and cache.is_available()
    mode = permission_cache.mode.value
    status = "ok" if available or mode == "sync" else "degraded"
    return ReadinessResponse(status=status, cache_mode=mode, cache_available=available)
