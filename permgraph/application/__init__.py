"""Application layer: interfaces and services.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (edge store, cache, channel).
"""

from permgraph.application.interfaces import (
    ICacheService,
    IEdgeStore,
    IInvalidationPublisher,
    IPrincipalDirectory,
)
from permgraph.application.services import (
    AuthorizationService,
    PermissionCache,
    PermissionEngine,
)

__all__ = [
    "AuthorizationService",
    "ICacheService",
    "IEdgeStore",
    "IInvalidationPublisher",
    "IPrincipalDirectory",
    "PermissionCache",
    "PermissionEngine",
]
