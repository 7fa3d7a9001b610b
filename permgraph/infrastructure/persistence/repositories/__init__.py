"""Persistence repositories: edge store and principal directory."""

from permgraph.infrastructure.persistence.repositories.base import BaseRepository
from permgraph.infrastructure.persistence.repositories.permission_edge_repo import (
    PermissionEdgeRepository,
)
from permgraph.infrastructure.persistence.repositories.principal_repo import (
    PrincipalRepository,
)
from permgraph.infrastructure.persistence.repositories.session_scoped import (
    SessionEdgeStore,
    SessionPrincipalDirectory,
)

__all__ = [
    "BaseRepository",
    "PermissionEdgeRepository",
    "PrincipalRepository",
    "SessionEdgeStore",
    "SessionPrincipalDirectory",
]
