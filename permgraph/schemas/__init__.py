"""Pydantic request/response schemas for the API."""

from permgraph.schemas.authorization import (
    AuthorizationRequestItem,
    AuthorizeRequest,
    AuthorizeResponse,
    CapabilityMaskResponse,
    InvalidateRequest,
    InvalidateResponse,
    PermissionSetResponse,
)
from permgraph.schemas.health import HealthResponse, ReadinessResponse

__all__ = [
    "AuthorizationRequestItem",
    "AuthorizeRequest",
    "AuthorizeResponse",
    "CapabilityMaskResponse",
    "HealthResponse",
    "InvalidateRequest",
    "InvalidateResponse",
    "PermissionSetResponse",
    "ReadinessResponse",
]
