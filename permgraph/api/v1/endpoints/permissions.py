"""Permission cache API: invalidation after edge or principal changes."""

from typing import Annotated

from fastapi import APIRouter, Depends

from permgraph.api.v1.dependencies import get_permission_cache
from permgraph.application.services import PermissionCache
from permgraph.schemas.authorization import InvalidateRequest, InvalidateResponse

router = APIRouter()


@router.post("/invalidate", response_model=InvalidateResponse, status_code=202)
async def invalidate_permissions(
    permission_cache: Annotated[PermissionCache, Depends(get_permission_cache)],
    body: InvalidateRequest | None = None,
) -> InvalidateResponse:
    """Mark every cached PermissionSet computed before timestamp as stale."""
    timestamp = await permission_cache.invalidate(body.timestamp if body else None)
    return InvalidateResponse(timestamp=timestamp, mode=permission_cache.mode.value)
