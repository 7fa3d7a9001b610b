"""Tests for permission cache key builders."""

import fnmatch

import pytest

from permgraph.infrastructure.cache.keys import permission_key, permission_pattern


def test_permission_key_format() -> None:
    assert permission_key("v1", "U1") == "permission:v1:U1"


def test_permission_pattern_matches_version_only() -> None:
    assert permission_pattern("v2") == "permission:v2:*"


def test_principal_id_may_contain_separator() -> None:
    key = permission_key("v1", "zzzzz-tpzed:x")
    assert key == "permission:v1:zzzzz-tpzed:x"
    assert fnmatch.fnmatchcase(key, permission_pattern("v1"))
    assert key != permission_key("v1", "zzzzz-tpzed")


@pytest.mark.parametrize(
    ("version", "principal_id"),
    [("", "U1"), ("v1", ""), ("v:1", "U1")],
)
def test_invalid_components_raise(version: str, principal_id: str) -> None:
    with pytest.raises(ValueError):
        permission_key(version, principal_id)
