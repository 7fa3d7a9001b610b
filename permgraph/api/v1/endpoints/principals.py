"""Principals API: read a principal's computed PermissionSet."""

from typing import Annotated

from fastapi import APIRouter, Depends

from permgraph.api.v1.dependencies import get_permission_cache, load_principal
from permgraph.application.services import PermissionCache
from permgraph.domain.entities import Principal
from permgraph.schemas.authorization import CapabilityMaskResponse, PermissionSetResponse

router = APIRouter()


@router.get("/{principal_id}/permissions", response_model=PermissionSetResponse)
async def get_principal_permissions(
    principal: Annotated[Principal, Depends(load_principal)],
    permission_cache: Annotated[PermissionCache, Depends(get_permission_cache)],
) -> PermissionSetResponse:
    """Return every node reachable from the principal with its capabilities."""
    permissions = await permission_cache.get(principal.id)
    return PermissionSetResponse(
        principal_id=principal.id,
        permissions={
            node_id: CapabilityMaskResponse.from_mask(mask)
            for node_id, mask in permissions.items()
        },
    )
