"""Infrastructure services: background permission cache repopulation."""

from permgraph.infrastructure.services.permission_refresh_worker import (
    PermissionRefreshWorker,
)

__all__ = [
    "PermissionRefreshWorker",
]
