"""Capability mask value object and the permission-set mapping built from it.

A mask is three independent booleans. Where a single ordered scalar is
more convenient (edge names, storage, sorting) the level encoding is used:
0 = none, 1 = read, 2 = read+write, 3 = read+write+manage.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from permgraph.domain.enums import Capability


@dataclass(frozen=True)
class CapabilityMask:
    """Immutable {read, write, manage} record.

    Union (``|``) merges grants from sibling edges; intersection (``&``)
    narrows what continues to propagate downstream.
    """

    read: bool = False
    write: bool = False
    manage: bool = False

    def __or__(self, other: CapabilityMask) -> CapabilityMask:
        return CapabilityMask(
            read=self.read or other.read,
            write=self.write or other.write,
            manage=self.manage or other.manage,
        )

    def __and__(self, other: CapabilityMask) -> CapabilityMask:
        return CapabilityMask(
            read=self.read and other.read,
            write=self.write and other.write,
            manage=self.manage and other.manage,
        )

    def grants(self, action: str | Capability) -> bool:
        """Return True if the mask holds the capability named by action.

        Unknown action names are never granted.
        """
        try:
            capability = Capability(action)
        except ValueError:
            return False
        return bool(getattr(self, capability.value))

    def is_empty(self) -> bool:
        """Return True when no capability is set."""
        return not (self.read or self.write or self.manage)

    @property
    def level(self) -> int:
        """Highest contiguous level held (read, then write, then manage)."""
        if not self.read:
            return 0
        if not self.write:
            return 1
        if not self.manage:
            return 2
        return 3

    @classmethod
    def from_level(cls, level: int) -> CapabilityMask:
        """Return the mask for an ordinal level 0-3.

        Raises:
            ValueError: If level is outside 0-3.
        """
        if level < 0 or level >= len(_LEVEL_MASKS):
            raise ValueError(f"Capability level must be 0-3, got: {level}")
        return _LEVEL_MASKS[level]

    def to_dict(self) -> dict[str, bool]:
        """Serialize as {"read": ..., "write": ..., "manage": ...}."""
        return {"read": self.read, "write": self.write, "manage": self.manage}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CapabilityMask:
        """Deserialize; missing keys are False."""
        return cls(
            read=bool(data.get("read", False)),
            write=bool(data.get("write", False)),
            manage=bool(data.get("manage", False)),
        )


NO_MASK = CapabilityMask()
FULL_MASK = CapabilityMask(read=True, write=True, manage=True)

_LEVEL_MASKS: tuple[CapabilityMask, ...] = (
    NO_MASK,
    CapabilityMask(read=True),
    CapabilityMask(read=True, write=True),
    FULL_MASK,
)

# group_or_principal_id -> mask. Always contains the start principal with FULL_MASK.
PermissionSet = dict[str, CapabilityMask]


def dump_permission_set(permissions: PermissionSet) -> dict[str, dict[str, bool]]:
    """Convert a PermissionSet to a JSON-serializable dict."""
    return {node_id: mask.to_dict() for node_id, mask in permissions.items()}


def load_permission_set(data: dict[str, dict[str, Any]]) -> PermissionSet:
    """Rebuild a PermissionSet from dump_permission_set output."""
    return {node_id: CapabilityMask.from_dict(mask) for node_id, mask in data.items()}
