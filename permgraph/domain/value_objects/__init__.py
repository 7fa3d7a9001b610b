"""Domain value objects: capability masks and their level encoding."""

from permgraph.domain.value_objects.capability import (
    FULL_MASK,
    NO_MASK,
    CapabilityMask,
    PermissionSet,
    dump_permission_set,
    load_permission_set,
)

__all__ = [
    "FULL_MASK",
    "NO_MASK",
    "CapabilityMask",
    "PermissionSet",
    "dump_permission_set",
    "load_permission_set",
]
