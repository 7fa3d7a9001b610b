"""Authorization service: decides (action, target) requests from the permission cache."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from permgraph.application.interfaces.repositories import IEdgeStore
from permgraph.application.services.permission_cache import PermissionCache
from permgraph.domain.entities import Principal, TargetRef, sufficient_edge_names
from permgraph.domain.exceptions import AuthorizationException

logger = logging.getLogger(__name__)

# (action, target) where target is a bare id or an object exposing id / has_owner() / owner_id
AuthorizationRequest = tuple[str, Any]


class AuthorizationService:
    """Centralized permission checking over cached PermissionSets.

    Cached transitive data answers most requests. A live edge lookup covers
    edges created after the principal's set was computed. Cache and edge
    store errors propagate so callers fail closed.
    """

    def __init__(self, permission_cache: PermissionCache, edge_store: IEdgeStore) -> None:
        self.permission_cache = permission_cache
        self.edge_store = edge_store

    async def can(self, principal: Principal, requests: Iterable[AuthorizationRequest]) -> bool:
        """Return True only if every request is allowed; stop at the first denial."""
        return await self.first_denied(principal, requests) is None

    async def require(
        self, principal: Principal, requests: Iterable[AuthorizationRequest]
    ) -> None:
        """Raise AuthorizationException naming the first denied request."""
        denied = await self.first_denied(principal, requests)
        if denied is not None:
            action, target = denied
            raise AuthorizationException(target_id=target.id, action=action)

    async def first_denied(
        self, principal: Principal, requests: Iterable[AuthorizationRequest]
    ) -> tuple[str, TargetRef] | None:
        """Return the first (action, target) that is not allowed, or None."""
        if principal.is_admin:
            return None
        for action, raw_target in requests:
            target = TargetRef.resolve(raw_target)
            if not await self._allows(principal, action, target):
                logger.debug("Denied %s on %s for %s", action, target.id, principal.id)
                return action, target
        return None

    async def _allows(self, principal: Principal, action: str, target: TargetRef) -> bool:
        if target.id == principal.id:
            return True
        permissions = await self.permission_cache.get(principal.id)
        mask = permissions.get(target.id)
        if mask is not None and mask.grants(action):
            return True
        if target.has_owner():
            owner_id = target.owner_id
            if owner_id == principal.id:
                return True
            owner_mask = permissions.get(owner_id) if owner_id else None
            if owner_mask is not None and owner_mask.grants(action):
                return True
        return await self._live_edge_exists(principal, action, target.id)

    async def _live_edge_exists(self, principal: Principal, action: str, target_id: str) -> bool:
        """Look for an edge pointing straight at target_id.

        Redundant when the cache is current; it catches edges added since
        the principal's set was computed.
        """
        names = sufficient_edge_names(action)
        if names is None:
            return False
        sources = await self.permission_cache.groups_i_can(principal.id, action)
        sources.append(principal.id)
        edges = await self.edge_store.find_edges(
            source_in=sources,
            target_in=[target_id],
            action_in=names,
        )
        if edges:
            logger.debug(
                "Allowed %s on %s for %s via live edge lookup", action, target_id, principal.id
            )
        return bool(edges)
