"""Edge and principal repository integration tests. Require Postgres; session is rolled back after each test."""

import pytest

from permgraph.application.services import PermissionEngine
from permgraph.domain.entities import Principal
from permgraph.domain.value_objects import CapabilityMask
from permgraph.infrastructure.persistence.models import PrincipalModel
from permgraph.infrastructure.persistence.repositories import (
    PermissionEdgeRepository,
    PrincipalRepository,
)
from permgraph.shared.utils import generate_cuid


@pytest.mark.requires_db
async def test_find_edges_filters(db_session) -> None:
    """source_in / target_in / action_in filters combine."""
    repo = PermissionEdgeRepository(db_session)
    u1, g1, g2 = (f"it-{generate_cuid()}" for _ in range(3))
    await repo.create_edge(u1, g1, "can_read")
    await repo.create_edge(g1, g2, "can_write")

    from_u1 = await repo.find_edges(source_in=[u1])
    assert [(e.source_id, e.target_id, e.name) for e in from_u1] == [(u1, g1, "can_read")]

    into_g2 = await repo.find_edges(target_in=[g2], action_in=["can_manage", "can_write"])
    assert len(into_g2) == 1
    assert await repo.find_edges(target_in=[g2], action_in=["can_manage"]) == []


@pytest.mark.requires_db
async def test_engine_over_sql_edges(db_session) -> None:
    repo = PermissionEdgeRepository(db_session)
    u1, g1, g2 = (f"it-{generate_cuid()}" for _ in range(3))
    await repo.create_edge(u1, g1, "can_read")
    await repo.create_edge(g1, g2, "can_write")
    result = await PermissionEngine(repo).compute(u1)
    assert result[g2] == CapabilityMask(read=True)


@pytest.mark.requires_db
async def test_principal_directory(db_session) -> None:
    repo = PrincipalRepository(db_session)
    principal_id = f"it-{generate_cuid()}"
    await repo.create(PrincipalModel(id=principal_id, is_admin=True))
    assert await repo.get_principal(principal_id) == Principal(id=principal_id, is_admin=True)
    assert principal_id in await repo.list_principal_ids()
    assert await repo.get_principal("it-missing") is None


@pytest.mark.requires_db
async def test_inactive_principal_hidden_from_both_lookups(db_session) -> None:
    repo = PrincipalRepository(db_session)
    principal_id = f"it-{generate_cuid()}"
    await repo.create(PrincipalModel(id=principal_id, is_active=False))
    assert await repo.get_principal(principal_id) is None
    assert principal_id not in await repo.list_principal_ids()
