"""permgraph: permission propagation, per-principal caching, and authorization decisions."""

__version__ = "1.0.0"
