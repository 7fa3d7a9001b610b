"""Propagation tests: self-grant, narrowing, sibling union, cycles, diamonds."""

from permgraph.application.services.propagation import build_graph, propagate
from permgraph.domain.entities import PermissionEdge
from permgraph.domain.value_objects import FULL_MASK, NO_MASK, CapabilityMask

READ = CapabilityMask(read=True)
READ_WRITE = CapabilityMask(read=True, write=True)


def _edges(*triples: tuple[str, str, str]) -> list[PermissionEdge]:
    return [PermissionEdge(source_id=s, target_id=t, name=n) for s, t, n in triples]


def test_principal_without_edges_has_full_mask_on_itself() -> None:
    """A principal with no outgoing edges gets only itself, with full capability."""
    assert propagate("U1", {}) == {"U1": FULL_MASK}


def test_start_node_stays_full_when_an_edge_points_back_at_it() -> None:
    """Edges leading back to the principal never reduce its own mask."""
    graph = build_graph(_edges(("U1", "G1", "can_read"), ("G1", "U1", "can_read")))
    result = propagate("U1", graph)
    assert result["U1"] == FULL_MASK
    assert result["G1"] == READ


def test_scenario_write_is_narrowed_away_by_read_only_first_hop() -> None:
    """U1 -read-> G1 -read,write-> G2 yields G2 read only."""
    graph = build_graph(_edges(("U1", "G1", "can_read"), ("G1", "G2", "can_write")))
    assert propagate("U1", graph) == {"U1": FULL_MASK, "G1": READ, "G2": READ}


def test_narrowing_never_exceeds_intersection_of_path_masks() -> None:
    """A manage edge after a write edge carries at most read+write."""
    graph = build_graph(
        _edges(("U1", "G1", "can_write"), ("G1", "G2", "can_manage"), ("G2", "G3", "can_read"))
    )
    result = propagate("U1", graph)
    assert result["G2"] == READ_WRITE
    assert result["G3"] == READ


def test_sibling_edges_into_one_target_are_unioned() -> None:
    """Two edges into the same group merge their masks."""
    graph = {
        "U1": [("G1", CapabilityMask(read=True)), ("G1", CapabilityMask(write=True))],
    }
    assert propagate("U1", graph)["G1"] == CapabilityMask(read=True, write=True)


def test_multiple_edge_names_between_one_pair_take_the_strongest() -> None:
    graph = build_graph(_edges(("U1", "G1", "can_read"), ("U1", "G1", "can_manage")))
    assert propagate("U1", graph)["G1"] == FULL_MASK


def test_cycle_terminates_with_finite_result() -> None:
    """A -> B -> A terminates."""
    graph = build_graph(
        _edges(("U1", "A", "can_manage"), ("A", "B", "can_write"), ("B", "A", "can_read"))
    )
    result = propagate("U1", graph)
    assert set(result) == {"U1", "A", "B"}
    assert result["A"] == FULL_MASK
    assert result["B"] == READ_WRITE


def test_self_loop_terminates() -> None:
    graph = build_graph(_edges(("U1", "G1", "can_read"), ("G1", "G1", "can_manage")))
    assert propagate("U1", graph)["G1"] == READ


def test_diamond_explores_both_branches() -> None:
    """The second route into D is not skipped just because D was seen before."""
    graph = build_graph(
        _edges(
            ("U1", "B", "can_read"),
            ("U1", "C", "can_manage"),
            ("B", "D", "can_manage"),
            ("C", "D", "can_manage"),
            ("D", "E", "can_manage"),
        )
    )
    result = propagate("U1", graph)
    assert result["D"] == FULL_MASK
    assert result["E"] == FULL_MASK


def test_target_reached_with_nothing_gets_empty_entry() -> None:
    """Targets touched by an edge are present even when no capability reached them."""
    graph = build_graph(_edges(("U1", "G1", "can_read"), ("G1", "G2", "can_delete")))
    result = propagate("U1", graph)
    assert result["G2"] == NO_MASK
    assert result["G2"].is_empty()


def test_long_chain_does_not_hit_recursion_limit() -> None:
    """Chains deeper than the interpreter recursion limit still propagate."""
    depth = 5000
    graph = build_graph(_edges(*[(f"N{i}", f"N{i + 1}", "can_read") for i in range(depth)]))
    result = propagate("N0", graph)
    assert len(result) == depth + 1
    assert result[f"N{depth}"] == READ


def test_build_graph_keeps_edge_order_per_source() -> None:
    graph = build_graph(_edges(("U1", "G2", "can_read"), ("U1", "G1", "can_write")))
    assert [target for target, _ in graph["U1"]] == ["G2", "G1"]
