"""Tests for CapabilityMask, permission-set serialization, and edge masks."""

import pytest

from permgraph.domain.entities import PermissionEdge, sufficient_edge_names
from permgraph.domain.enums import Capability
from permgraph.domain.value_objects import (
    FULL_MASK,
    NO_MASK,
    CapabilityMask,
    dump_permission_set,
    load_permission_set,
)


def test_union_and_intersection() -> None:
    read = CapabilityMask(read=True)
    write = CapabilityMask(write=True)
    assert read | write == CapabilityMask(read=True, write=True)
    assert (read | write) & read == read
    assert read & write == NO_MASK


@pytest.mark.parametrize(
    ("level", "expected"),
    [
        (0, NO_MASK),
        (1, CapabilityMask(read=True)),
        (2, CapabilityMask(read=True, write=True)),
        (3, FULL_MASK),
    ],
)
def test_from_level(level: int, expected: CapabilityMask) -> None:
    assert CapabilityMask.from_level(level) == expected
    assert expected.level == level


def test_from_level_out_of_range_raises() -> None:
    with pytest.raises(ValueError, match="0-3"):
        CapabilityMask.from_level(4)
    with pytest.raises(ValueError):
        CapabilityMask.from_level(-1)


def test_level_is_highest_contiguous() -> None:
    """write without read counts as level 0."""
    assert CapabilityMask(write=True, manage=True).level == 0


def test_grants_known_and_unknown_actions() -> None:
    mask = CapabilityMask(read=True, write=True)
    assert mask.grants("read")
    assert mask.grants(Capability.WRITE)
    assert not mask.grants("manage")
    assert not mask.grants("delete")
    assert not FULL_MASK.grants("")


def test_is_empty() -> None:
    assert NO_MASK.is_empty()
    assert not CapabilityMask(manage=True).is_empty()


def test_mask_is_immutable() -> None:
    with pytest.raises(AttributeError):
        FULL_MASK.read = False  # type: ignore[misc]


def test_from_dict_treats_missing_keys_as_false() -> None:
    assert CapabilityMask.from_dict({"read": True}) == CapabilityMask(read=True)


def test_permission_set_dump_and_load() -> None:
    permissions = {"U1": FULL_MASK, "G1": CapabilityMask(read=True), "G2": NO_MASK}
    dumped = dump_permission_set(permissions)
    assert dumped["G1"] == {"read": True, "write": False, "manage": False}
    assert load_permission_set(dumped) == permissions


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("can_read", CapabilityMask(read=True)),
        ("can_write", CapabilityMask(read=True, write=True)),
        ("can_manage", FULL_MASK),
        ("can_login", NO_MASK),
    ],
)
def test_edge_mask_from_name(name: str, expected: CapabilityMask) -> None:
    assert PermissionEdge(source_id="U1", target_id="G1", name=name).mask == expected


def test_edges_compare_without_properties() -> None:
    a = PermissionEdge(source_id="U1", target_id="G1", name="can_read", properties={"x": 1})
    b = PermissionEdge(source_id="U1", target_id="G1", name="can_read")
    assert a == b


def test_sufficient_edge_names() -> None:
    assert sufficient_edge_names("manage") == ["can_manage"]
    assert sufficient_edge_names("write") == ["can_manage", "can_write"]
    assert sufficient_edge_names("read") == ["can_manage", "can_write", "can_read"]
    assert sufficient_edge_names("delete") is None
