"""Persistence models: ORM entities and mixins."""

from permgraph.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin
from permgraph.infrastructure.persistence.models.permission_edge import PermissionEdgeModel
from permgraph.infrastructure.persistence.models.principal import PrincipalModel

__all__ = [
    "CuidMixin",
    "PermissionEdgeModel",
    "PrincipalModel",
    "TimestampMixin",
]
