"""Permission propagation: transitive closure over permission edges.

Depth-first from a start principal. Each node contributes, to every
target it points at, the edge mask narrowed by what reached the node
(upstream). Sibling edges into the same target are unioned. Only the
capabilities present both upstream and at the target travel further.

The cycle guard is path-local: a node is skipped only while it is on the
current path, so diamonds are fully explored and only true cycles are cut.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Iterator

from permgraph.domain.entities import PermissionEdge
from permgraph.domain.value_objects import FULL_MASK, NO_MASK, CapabilityMask, PermissionSet

# source_id -> [(target_id, mask), ...] in edge order
PermissionGraph = dict[str, list[tuple[str, CapabilityMask]]]


def build_graph(edges: Iterable[PermissionEdge]) -> PermissionGraph:
    """Group edges into an adjacency list keyed by source id."""
    graph: defaultdict[str, list[tuple[str, CapabilityMask]]] = defaultdict(list)
    for edge in edges:
        graph[edge.source_id].append((edge.target_id, edge.mask))
    return dict(graph)


def propagate(start_id: str, graph: PermissionGraph) -> PermissionSet:
    """Return the PermissionSet reachable from start_id through graph.

    The result always maps start_id to FULL_MASK. Every target touched by
    an edge gets an entry, even when nothing reached it (empty mask).

    Implemented with an explicit stack of (node, upstream mask, edge
    iterator) frames so long chains do not hit the recursion limit. The
    on-path set lives only for the duration of the call.
    """
    merged: PermissionSet = {start_id: FULL_MASK}
    if not graph.get(start_id):
        return merged

    on_path: set[str] = {start_id}
    stack: list[tuple[str, CapabilityMask, Iterator[tuple[str, CapabilityMask]]]] = [
        (start_id, FULL_MASK, iter(graph[start_id]))
    ]
    while stack:
        node, upstream, edges = stack[-1]
        edge = next(edges, None)
        if edge is None:
            stack.pop()
            on_path.discard(node)
            continue
        head, edge_mask = edge
        head_mask = merged.get(head, NO_MASK) | (edge_mask & upstream)
        merged[head] = head_mask
        if head in on_path or not graph.get(head):
            continue
        on_path.add(head)
        stack.append((head, upstream & head_mask, iter(graph[head])))
    return merged
