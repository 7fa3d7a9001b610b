"""Session-per-call adapters over the SQL repositories.

The permission cache, authorization service, and refresh worker live for
the whole process, while SQLAlchemy sessions should not. These adapters
open a short-lived session for each call.
"""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from permgraph.domain.entities import PermissionEdge, Principal
from permgraph.infrastructure.persistence.database import get_session_factory
from permgraph.infrastructure.persistence.repositories.permission_edge_repo import (
    PermissionEdgeRepository,
)
from permgraph.infrastructure.persistence.repositories.principal_repo import (
    PrincipalRepository,
)


class _SessionScoped:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession] | None = None) -> None:
        self._session_factory = session_factory

    def _factory(self) -> async_sessionmaker[AsyncSession]:
        if self._session_factory is None:
            self._session_factory = get_session_factory()
        return self._session_factory


class SessionEdgeStore(_SessionScoped):
    """IEdgeStore backed by PermissionEdgeRepository, one session per query."""

    async def find_edges(
        self,
        *,
        source_in: Iterable[str] | None = None,
        target_in: Iterable[str] | None = None,
        action_in: Iterable[str] | None = None,
    ) -> list[PermissionEdge]:
        async with self._factory()() as session:
            return await PermissionEdgeRepository(session).find_edges(
                source_in=source_in, target_in=target_in, action_in=action_in
            )


class SessionPrincipalDirectory(_SessionScoped):
    """IPrincipalDirectory backed by PrincipalRepository, one session per call."""

    async def get_principal(self, principal_id: str) -> Principal | None:
        async with self._factory()() as session:
            return await PrincipalRepository(session).get_principal(principal_id)

    async def list_principal_ids(self) -> list[str]:
        async with self._factory()() as session:
            return await PrincipalRepository(session).list_principal_ids()
