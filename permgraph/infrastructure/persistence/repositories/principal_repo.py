"""Principal repository (implements IPrincipalDirectory)."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from permgraph.domain.entities import Principal
from permgraph.infrastructure.persistence.models.principal import PrincipalModel
from permgraph.infrastructure.persistence.repositories.base import BaseRepository


class PrincipalRepository(BaseRepository[PrincipalModel]):
    """Principal lookups for authorization requests and the refresh worker."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, PrincipalModel)

    async def get_principal(self, principal_id: str) -> Principal | None:
        """Return the active principal as a domain entity, or None.

        Inactive principals count as unknown; the refresh worker never caches them.
        """
        row = await self.get_by_id(principal_id)
        if row is None or not row.is_active:
            return None
        return Principal(id=row.id, is_admin=row.is_admin)

    async def list_principal_ids(self) -> list[str]:
        """Return ids of active principals (the ones worth caching)."""
        result = await self.db.execute(
            select(PrincipalModel.id)
            .where(PrincipalModel.is_active.is_(True))
            .order_by(PrincipalModel.id)
        )
        return list(result.scalars().all())
