"""Shared telemetry: logging setup and tracing helpers."""

from permgraph.shared.telemetry.logging import setup_logging
from permgraph.shared.telemetry.tracing import (
    add_span_attributes,
    traced,
)

__all__ = [
    "setup_logging",
    "traced",
    "add_span_attributes",
]
