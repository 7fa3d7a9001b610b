"""Cache: Redis and in-process stores plus cache key utilities.

Used by the permission cache. CacheService uses permgraph.core.config;
key format is in keys.py (DRY).
"""

from permgraph.infrastructure.cache.keys import permission_key, permission_pattern
from permgraph.infrastructure.cache.memory_cache import InMemoryCache
from permgraph.infrastructure.cache.redis_cache import CacheService

__all__ = [
    "CacheService",
    "InMemoryCache",
    "permission_key",
    "permission_pattern",
]
