"""Application services: propagation, permission engine, cache, authorization."""

from permgraph.application.services.authorization_service import AuthorizationService
from permgraph.application.services.permission_cache import PermissionCache
from permgraph.application.services.permission_engine import PermissionEngine
from permgraph.application.services.propagation import (
    PermissionGraph,
    build_graph,
    propagate,
)

__all__ = [
    "AuthorizationService",
    "PermissionCache",
    "PermissionEngine",
    "PermissionGraph",
    "build_graph",
    "propagate",
]
