"""Permission engine: loads edges from the edge store and runs propagation."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from permgraph.application.interfaces.repositories import IEdgeStore
from permgraph.application.services.propagation import build_graph, propagate
from permgraph.domain.entities import PermissionEdge
from permgraph.domain.value_objects import PermissionSet
from permgraph.shared.telemetry.tracing import add_span_attributes, traced

logger = logging.getLogger(__name__)


class PermissionEngine:
    """Computes PermissionSets for principals from the edge store.

    Edge store failures propagate to the caller unchanged; there is no
    fallback, so authorization fails closed.
    """

    def __init__(self, edge_store: IEdgeStore) -> None:
        self.edge_store = edge_store

    async def _load_reachable_edges(self, principal_id: str) -> list[PermissionEdge]:
        """Fetch the edges reachable from principal_id, one query per graph level."""
        edges: list[PermissionEdge] = []
        seen: set[str] = {principal_id}
        frontier: set[str] = {principal_id}
        while frontier:
            batch = await self.edge_store.find_edges(source_in=sorted(frontier))
            edges.extend(batch)
            frontier = {edge.target_id for edge in batch} - seen
            seen |= frontier
        return edges

    @traced("permissions.compute")
    async def compute(self, principal_id: str) -> PermissionSet:
        """Return the PermissionSet for one principal."""
        edges = await self._load_reachable_edges(principal_id)
        permissions = propagate(principal_id, build_graph(edges))
        add_span_attributes(
            principal_id=principal_id, edge_count=len(edges), entry_count=len(permissions)
        )
        logger.debug(
            "Computed permissions for %s: %s edges, %s entries",
            principal_id,
            len(edges),
            len(permissions),
        )
        return permissions

    @traced("permissions.compute_all")
    async def compute_all(self, principal_ids: Iterable[str]) -> dict[str, PermissionSet]:
        """Return PermissionSets for many principals from a single bulk edge fetch."""
        edges = await self.edge_store.find_edges()
        graph = build_graph(edges)
        result = {principal_id: propagate(principal_id, graph) for principal_id in principal_ids}
        add_span_attributes(edge_count=len(edges), principal_count=len(result))
        return result
