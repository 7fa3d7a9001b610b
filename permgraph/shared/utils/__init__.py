"""Shared utilities: UTC time helpers and id generators."""

from permgraph.shared.utils.datetime import utc_now, utc_timestamp
from permgraph.shared.utils.generators import generate_cuid

__all__ = [
    "generate_cuid",
    "utc_now",
    "utc_timestamp",
]
