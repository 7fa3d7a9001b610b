"""
UTC time utilities for consistent timestamp handling.

Invalidation signals and cache entries carry float UNIX timestamps so they
can be compared across processes. Use these helpers instead of time.time()
or datetime.now() so every timestamp comes from the same UTC clock.
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(UTC)


def utc_timestamp() -> float:
    """
    Return the current UTC time as a UNIX timestamp (seconds, float).

    Returns:
        Seconds since epoch
    """
    return utc_now().timestamp()
