"""Service interfaces (ports) for the application layer.

Protocols for the keyed cache store and the invalidation channel the
permission cache depends on (DIP).
"""

from __future__ import annotations

from typing import Any, Protocol


class ICacheService(Protocol):
    """Protocol for a keyed cache store (get / set-with-TTL / delete-by-pattern)."""

    def is_available(self) -> bool:
        """Return True if the store is connected and usable."""
        ...

    async def get(self, key: str) -> Any:
        """Return cached value or None."""
        ...

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store value with TTL in seconds. Returns True on success."""
        ...

    async def delete(self, key: str) -> bool:
        """Remove key. Returns True on success."""
        ...

    async def delete_pattern(self, pattern: str) -> int:
        """Remove every key matching a glob pattern. Returns count deleted."""
        ...


class IInvalidationPublisher(Protocol):
    """Protocol for broadcasting invalidation timestamps to every process."""

    async def publish(self, timestamp: float) -> bool:
        """Publish timestamp. Returns True if published."""
        ...
