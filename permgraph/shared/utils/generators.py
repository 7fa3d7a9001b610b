"""Identifier generation for rows that carry no upstream id (permission edges)."""

from cuid2 import cuid_wrapper

_next_cuid = cuid_wrapper()


def generate_cuid() -> str:
    """Return a new CUID2 string; default primary key for permission_edge rows."""
    return str(_next_cuid())
