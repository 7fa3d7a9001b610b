"""Presentation-layer dependency injection.

Services are process-wide singletons built once in core.lifespan and kept
on app.state; routes depend only on these accessors, not on infra directly.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from permgraph.application.interfaces import IPrincipalDirectory
from permgraph.application.services import AuthorizationService, PermissionCache
from permgraph.domain.entities import Principal
from permgraph.domain.exceptions import ResourceNotFoundException


def get_permission_cache(request: Request) -> PermissionCache:
    """Process-wide permission cache."""
    return request.app.state.permission_cache


def get_authorization_service(request: Request) -> AuthorizationService:
    """Process-wide authorization service."""
    return request.app.state.authorization_service


def get_principal_directory(request: Request) -> IPrincipalDirectory:
    """Principal lookup (SQL-backed outside tests)."""
    return request.app.state.principal_directory


async def load_principal(
    principal_id: str,
    directory: Annotated[IPrincipalDirectory, Depends(get_principal_directory)],
) -> Principal:
    """Resolve principal_id or raise ResourceNotFoundException (404)."""
    principal = await directory.get_principal(principal_id)
    if principal is None:
        raise ResourceNotFoundException("principal", principal_id)
    return principal
