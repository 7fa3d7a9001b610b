"""Core constants: cache key prefixes, edge vocabulary, and shared literal values.

Single source of truth for cache key structure and permission edge names
(DRY). Used by the cache key builders, the edge store, and the
authorization service.
"""

# Cache key prefix for per-principal permission sets. The version segment
# (settings.permission_cache_key_version) follows it; bump the version when
# the serialized entry format changes so old entries read as misses.
CACHE_PREFIX_PERMISSION = "permission"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# Default pub/sub channel carrying invalidation timestamps
INVALIDATION_CHANNEL = "invalidate_permissions_cache"

# Link class for edges that carry permissions (other classes are ignored)
PERMISSION_LINK_CLASS = "permission"

# Edge action-names, weakest to strongest
EDGE_CAN_READ = "can_read"
EDGE_CAN_WRITE = "can_write"
EDGE_CAN_MANAGE = "can_manage"

# 48 hours
DEFAULT_PERMISSION_CACHE_TTL = 172800
