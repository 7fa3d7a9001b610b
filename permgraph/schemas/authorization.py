"""Authorization and permission cache API schemas."""

from pydantic import BaseModel, Field

from permgraph.domain.value_objects import CapabilityMask


class AuthorizationRequestItem(BaseModel):
    """One (action, target) pair to authorize."""

    action: str = Field(..., min_length=1, max_length=32, description="read, write or manage")
    target_id: str = Field(..., min_length=1, max_length=255)
    owner_id: str | None = Field(
        default=None,
        max_length=255,
        description="Owner of the target, when the target is an owned object",
    )


class AuthorizeRequest(BaseModel):
    """Request body for POST /authorize."""

    principal_id: str = Field(..., min_length=1, max_length=255)
    requests: list[AuthorizationRequestItem] = Field(..., min_length=1)


class AuthorizeResponse(BaseModel):
    """Whether every request in the batch is allowed."""

    allowed: bool
    denied_action: str | None = None
    denied_target_id: str | None = None


class CapabilityMaskResponse(BaseModel):
    """Capabilities held on one node."""

    read: bool
    write: bool
    manage: bool

    @classmethod
    def from_mask(cls, mask: CapabilityMask) -> "CapabilityMaskResponse":
        return cls(read=mask.read, write=mask.write, manage=mask.manage)


class PermissionSetResponse(BaseModel):
    """A principal's computed PermissionSet."""

    principal_id: str
    permissions: dict[str, CapabilityMaskResponse]


class InvalidateRequest(BaseModel):
    """Request body for POST /permissions/invalidate."""

    timestamp: float | None = Field(
        default=None,
        ge=0,
        description="UNIX timestamp; entries computed before it become stale. Defaults to now.",
    )


class InvalidateResponse(BaseModel):
    """Result of an invalidation."""

    timestamp: float
    mode: str
