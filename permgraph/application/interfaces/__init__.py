"""Application interfaces (ports): edge store, principal directory, cache, channel."""

from permgraph.application.interfaces.repositories import (
    IEdgeStore,
    IPrincipalDirectory,
)
from permgraph.application.interfaces.services import (
    ICacheService,
    IInvalidationPublisher,
)

__all__ = [
    "ICacheService",
    "IEdgeStore",
    "IInvalidationPublisher",
    "IPrincipalDirectory",
]
