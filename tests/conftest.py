"""Pytest configuration and fixtures for permgraph.

In-memory edge store and principal directory stand in for SQL. HTTP tests
use permgraph.main:create_app with services placed on app.state directly
(ASGITransport does not run the lifespan). DB-dependent fixtures use
permgraph.infrastructure.persistence.database and skip without Postgres.
"""

from collections.abc import Iterable

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from permgraph.application.services import (
    AuthorizationService,
    PermissionCache,
    PermissionEngine,
)
from permgraph.domain.entities import PermissionEdge, Principal
from permgraph.infrastructure.cache import InMemoryCache
from permgraph.infrastructure.persistence import database, models  # noqa: F401  (registers tables)
from permgraph.main import create_app


class InMemoryEdgeStore:
    """IEdgeStore over a list of edges. Records every query for assertions."""

    def __init__(self, edges: Iterable[PermissionEdge] = ()) -> None:
        self.edges = list(edges)
        self.queries: list[dict] = []
        self.error: Exception | None = None

    def add(self, source_id: str, target_id: str, name: str) -> PermissionEdge:
        edge = PermissionEdge(source_id=source_id, target_id=target_id, name=name)
        self.edges.append(edge)
        return edge

    async def find_edges(
        self,
        *,
        source_in: Iterable[str] | None = None,
        target_in: Iterable[str] | None = None,
        action_in: Iterable[str] | None = None,
    ) -> list[PermissionEdge]:
        sources = set(source_in) if source_in is not None else None
        targets = set(target_in) if target_in is not None else None
        names = set(action_in) if action_in is not None else None
        self.queries.append({"source_in": sources, "target_in": targets, "action_in": names})
        if self.error is not None:
            raise self.error
        return [
            edge
            for edge in self.edges
            if (sources is None or edge.source_id in sources)
            and (targets is None or edge.target_id in targets)
            and (names is None or edge.name in names)
        ]


class InMemoryPrincipalDirectory:
    """IPrincipalDirectory over a dict of principals. Inactive ids are hidden from both methods."""

    def __init__(self, principals: Iterable[Principal] = ()) -> None:
        self.principals = {p.id: p for p in principals}
        self.inactive: set[str] = set()

    def add(self, principal: Principal, *, active: bool = True) -> Principal:
        self.principals[principal.id] = principal
        if not active:
            self.inactive.add(principal.id)
        return principal

    async def get_principal(self, principal_id: str) -> Principal | None:
        if principal_id in self.inactive:
            return None
        return self.principals.get(principal_id)

    async def list_principal_ids(self) -> list[str]:
        return sorted(set(self.principals) - self.inactive)


@pytest.fixture
def edge_store() -> InMemoryEdgeStore:
    """Edge store holding U1 -can_read-> G1 -can_write-> G2."""
    store = InMemoryEdgeStore()
    store.add("U1", "G1", "can_read")
    store.add("G1", "G2", "can_write")
    return store


@pytest.fixture
def principal_directory() -> InMemoryPrincipalDirectory:
    return InMemoryPrincipalDirectory(
        [Principal(id="U1"), Principal(id="U2"), Principal(id="ADMIN", is_admin=True)]
    )


@pytest.fixture
def cache_store() -> InMemoryCache:
    return InMemoryCache()


@pytest.fixture
def permission_cache(edge_store, cache_store) -> PermissionCache:
    """Sync-mode permission cache over the in-memory stores."""
    return PermissionCache(PermissionEngine(edge_store), cache_store)


@pytest.fixture
def authorization_service(permission_cache, edge_store) -> AuthorizationService:
    return AuthorizationService(permission_cache, edge_store)


@pytest.fixture
def app(permission_cache, authorization_service, principal_directory) -> FastAPI:
    """FastAPI app with in-memory services on app.state."""
    application = create_app()
    application.state.permission_cache = permission_cache
    application.state.authorization_service = authorization_service
    application.state.principal_directory = principal_directory
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def db_session() -> AsyncSession:
    """Database session for repository/integration tests. Rolls back after test.

    Requires DATABASE_URL. Skips (pytest.skip) when Postgres is not
    configured. Tables are created if missing.
    """
    database._ensure_engine()
    if database.AsyncSessionLocal is None or database.engine is None:
        pytest.skip("Postgres not configured: set DATABASE_URL")
    async with database.engine.begin() as conn:
        await conn.run_sync(database.Base.metadata.create_all)
    async with database.AsyncSessionLocal() as session:
        yield session
        await session.rollback()
