"""Domain enumerations for permgraph.

Enums represent fixed sets of domain values (capabilities, cache modes).
"""

from enum import Enum

class Capability(str, Enum):
    """Capability a principal may hold on a target.

    Conventionally manage implies write implies read; that ordering is
    carried by how masks are built (see CapabilityMask.from_level), not
    enforced by the enum.
    """

    READ = "read"
    WRITE = "write"
    MANAGE = "manage"


class CacheMode(str, Enum):
    """Permission cache consistency mode."""

    SYNC = "sync"
    ASYNC = "async"
