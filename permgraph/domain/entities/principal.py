"""Principal and authorization target entities.

Targets are either bare identifiers or objects that also expose an owner.
TargetRef is the resolved form; callers passing a bare id get a TargetRef
with no owner.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from permgraph.domain.exceptions import ValidationException


@dataclass(frozen=True)
class Principal:
    """Actor permissions are computed for (a user)."""

    id: str
    is_admin: bool = False

    def __post_init__(self) -> None:
        if not self.id:
            raise ValidationException("Principal ID is required", field="id")


@runtime_checkable
class OwnedTarget(Protocol):
    """Target that can report an owner. Checked via has_owner(), not type."""

    id: str

    def has_owner(self) -> bool: ...

    @property
    def owner_id(self) -> str | None: ...


@dataclass(frozen=True)
class TargetRef:
    """Resolved authorization target: identifier plus optional owner."""

    id: str
    owner: str | None = None

    def has_owner(self) -> bool:
        return self.owner is not None

    @property
    def owner_id(self) -> str | None:
        return self.owner

    @classmethod
    def resolve(cls, target: Any) -> TargetRef:
        """Build a TargetRef from a bare id or an object exposing id (and maybe an owner).

        Raises:
            ValidationException: If the target has no usable identifier.
        """
        if isinstance(target, TargetRef):
            return target
        if isinstance(target, str):
            if not target:
                raise ValidationException("Target ID is required", field="target")
            return cls(id=target)
        target_id = getattr(target, "id", None)
        if not target_id:
            raise ValidationException("Target ID is required", field="target")
        owner = None
        has_owner = getattr(target, "has_owner", None)
        if callable(has_owner) and has_owner():
            owner = getattr(target, "owner_id", None)
        return cls(id=str(target_id), owner=owner)
