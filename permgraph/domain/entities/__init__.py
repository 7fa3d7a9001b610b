"""Domain entities: principals, targets, permission edges."""

from permgraph.domain.entities.permission_edge import (
    EDGE_NAME_LEVELS,
    SUFFICIENT_EDGE_NAMES,
    PermissionEdge,
    sufficient_edge_names,
)
from permgraph.domain.entities.principal import OwnedTarget, Principal, TargetRef

__all__ = [
    "EDGE_NAME_LEVELS",
    "SUFFICIENT_EDGE_NAMES",
    "OwnedTarget",
    "PermissionEdge",
    "Principal",
    "TargetRef",
    "sufficient_edge_names",
]
