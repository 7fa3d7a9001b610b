"""Repository interfaces (ports) for the application layer.

Protocols for the edge store and principal directory. Infrastructure
provides SQLAlchemy implementations; tests provide in-memory ones.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from permgraph.domain.entities import PermissionEdge, Principal


class IEdgeStore(Protocol):
    """Protocol for reading permission edges (link class 'permission' only)."""

    async def find_edges(
        self,
        *,
        source_in: Iterable[str] | None = None,
        target_in: Iterable[str] | None = None,
        action_in: Iterable[str] | None = None,
    ) -> list[PermissionEdge]:
        """Return permission edges matching every filter given (None = unfiltered).

        Raises EdgeStoreUnavailableException when the store cannot be read.
        """
        ...


class IPrincipalDirectory(Protocol):
    """Protocol for looking up principals (refresh worker, API)."""

    async def get_principal(self, principal_id: str) -> Principal | None:
        """Return principal by id, or None when unknown or inactive.

        Must agree with list_principal_ids, so every principal returned here
        is one the refresh worker caches.
        """
        ...

    async def list_principal_ids(self) -> list[str]:
        """Return ids of every principal whose permissions should be cached."""
        ...
