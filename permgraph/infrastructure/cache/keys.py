"""Cache key builders. Single place for key format (DRY).

Permission keys look like ``permission:<version>:<principal_id>``. The
version must not contain CACHE_KEY_SEP; the principal id is the last
segment and is opaque, so it may.
"""

from permgraph.core.constants import CACHE_KEY_SEP, CACHE_PREFIX_PERMISSION


def _require_non_empty(value: str, name: str) -> None:
    if not value:
        raise ValueError(f"Cache key component {name!r} must not be empty")


def _validate_version(version: str) -> None:
    """Raise ValueError if version is empty or contains the cache key separator."""
    _require_non_empty(version, "version")
    if CACHE_KEY_SEP in version:
        raise ValueError(
            f"Cache key component 'version' must not contain separator {CACHE_KEY_SEP!r}"
        )


def permission_key(version: str, principal_id: str) -> str:
    """Cache key for one principal's permission set."""
    _validate_version(version)
    _require_non_empty(principal_id, "principal_id")
    return f"{CACHE_PREFIX_PERMISSION}{CACHE_KEY_SEP}{version}{CACHE_KEY_SEP}{principal_id}"


def permission_pattern(version: str) -> str:
    """Glob pattern matching every permission entry of a key version."""
    _validate_version(version)
    return f"{CACHE_PREFIX_PERMISSION}{CACHE_KEY_SEP}{version}{CACHE_KEY_SEP}*"
