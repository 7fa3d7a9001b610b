"""Domain layer: entities, value objects, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from permgraph.domain.entities import PermissionEdge, Principal, TargetRef
from permgraph.domain.enums import CacheMode, Capability
from permgraph.domain.exceptions import (
    AuthorizationException,
    CacheUnavailableException,
    EdgeStoreUnavailableException,
    PermGraphException,
    PermissionCacheTimeoutException,
    ResourceNotFoundException,
    ValidationException,
)
from permgraph.domain.value_objects import FULL_MASK, NO_MASK, CapabilityMask, PermissionSet

__all__ = [
    "FULL_MASK",
    "NO_MASK",
    "AuthorizationException",
    "CacheMode",
    "CacheUnavailableException",
    "Capability",
    "CapabilityMask",
    "EdgeStoreUnavailableException",
    "PermGraphException",
    "PermissionCacheTimeoutException",
    "PermissionEdge",
    "PermissionSet",
    "Principal",
    "ResourceNotFoundException",
    "TargetRef",
    "ValidationException",
]
