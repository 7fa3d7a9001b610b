"""Permission edge entity.

A directed grant: source has the edge's capability on everything owned by
or reachable through target. The capability is carried by the edge name
(can_read / can_write / can_manage); unknown names grant nothing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from permgraph.core.constants import EDGE_CAN_MANAGE, EDGE_CAN_READ, EDGE_CAN_WRITE
from permgraph.domain.enums import Capability
from permgraph.domain.value_objects.capability import NO_MASK, CapabilityMask

EDGE_NAME_LEVELS: dict[str, int] = {
    EDGE_CAN_READ: 1,
    EDGE_CAN_WRITE: 2,
    EDGE_CAN_MANAGE: 3,
}

# Edge names strong enough to satisfy each capability in a live lookup.
SUFFICIENT_EDGE_NAMES: dict[Capability, list[str]] = {
    Capability.MANAGE: [EDGE_CAN_MANAGE],
    Capability.WRITE: [EDGE_CAN_MANAGE, EDGE_CAN_WRITE],
    Capability.READ: [EDGE_CAN_MANAGE, EDGE_CAN_WRITE, EDGE_CAN_READ],
}


def sufficient_edge_names(action: str) -> list[str] | None:
    """Return edge names that satisfy action, or None for an unknown action."""
    try:
        return SUFFICIENT_EDGE_NAMES[Capability(action)]
    except ValueError:
        return None


@dataclass(frozen=True)
class PermissionEdge:
    """Directed permission edge between two identifiers."""

    source_id: str
    target_id: str
    name: str
    properties: dict[str, Any] = field(default_factory=dict, hash=False, compare=False)

    @property
    def mask(self) -> CapabilityMask:
        level = EDGE_NAME_LEVELS.get(self.name)
        if level is None:
            return NO_MASK
        return CapabilityMask.from_level(level)
