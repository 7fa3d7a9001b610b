"""Domain exceptions for permgraph.

Defines domain-level exceptions for authorization outcomes and for the
collaborators the permission cache depends on. Presentation layer maps
them to HTTP responses in exception handlers.
"""

from typing import Any


class PermGraphException(Exception):
    """Base exception for all permgraph errors.

    All custom exceptions inherit from this class to allow consistent error
    handling and logging. Presentation layer maps these to HTTP responses
    using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. principal_id, action).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON error responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(PermGraphException):
    """Raised when input validation fails (e.g. empty identifier)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthorizationException(PermGraphException):
    """Raised when the principal lacks the capability for a requested action."""

    def __init__(
        self,
        target_id: str | None = None,
        action: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with optional target, action, and message.

        Args:
            target_id: Optional identifier of the target that was denied.
            action: Optional action that was attempted (read, write, manage).
            message: Human-readable message; default used when target/action omitted.
        """
        if target_id and action:
            message = f"Permission denied: {action} on {target_id}"
        details: dict[str, Any] = {}
        if target_id:
            details["target_id"] = target_id
        if action:
            details["action"] = action
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(PermGraphException):
    """Raised when a requested resource (e.g. principal) is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'principal').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class EdgeStoreUnavailableException(PermGraphException):
    """Raised when permission edges cannot be read. Authorization fails closed."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            "Permission edge store unavailable",
            "EDGE_STORE_UNAVAILABLE",
            {"reason": reason},
        )


class CacheUnavailableException(PermGraphException):
    """Raised in async cache mode when the cache store cannot be reached."""

    def __init__(self, message: str = "Permission cache store unavailable") -> None:
        super().__init__(message, "CACHE_UNAVAILABLE")


class PermissionCacheTimeoutException(PermGraphException):
    """Raised when an async-mode get() waits past its deadline for repopulation."""

    def __init__(self, principal_id: str, waited_seconds: float) -> None:
        """Initialize with the principal and how long the caller waited.

        Args:
            principal_id: Principal whose permission set never appeared.
            waited_seconds: Elapsed wait before giving up.
        """
        super().__init__(
            f"Timed out waiting for permissions of {principal_id}",
            "PERMISSION_CACHE_TIMEOUT",
            {"principal_id": principal_id, "waited_seconds": round(waited_seconds, 3)},
        )


class SqlNotConfiguredException(PermGraphException):
    """Raised when an operation requires the SQL edge store but DATABASE_URL is unset."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
