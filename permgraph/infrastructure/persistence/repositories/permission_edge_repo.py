"""Permission edge repository (implements IEdgeStore)."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from permgraph.core.constants import PERMISSION_LINK_CLASS
from permgraph.domain.entities import PermissionEdge
from permgraph.domain.exceptions import EdgeStoreUnavailableException
from permgraph.infrastructure.persistence.models.permission_edge import PermissionEdgeModel
from permgraph.infrastructure.persistence.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


def _to_entity(row: PermissionEdgeModel) -> PermissionEdge:
    return PermissionEdge(
        source_id=row.source_id,
        target_id=row.target_id,
        name=row.name,
        properties=dict(row.properties or {}),
    )


class PermissionEdgeRepository(BaseRepository[PermissionEdgeModel]):
    """Reads permission edges for propagation (bulk) and live lookups (point)."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, PermissionEdgeModel)

    async def find_edges(
        self,
        *,
        source_in: Iterable[str] | None = None,
        target_in: Iterable[str] | None = None,
        action_in: Iterable[str] | None = None,
    ) -> list[PermissionEdge]:
        """Return permission edges matching every filter given.

        Raises:
            EdgeStoreUnavailableException: On any database error.
        """
        query = select(PermissionEdgeModel).where(
            PermissionEdgeModel.link_class == PERMISSION_LINK_CLASS
        )
        if source_in is not None:
            query = query.where(PermissionEdgeModel.source_id.in_(list(source_in)))
        if target_in is not None:
            query = query.where(PermissionEdgeModel.target_id.in_(list(target_in)))
        if action_in is not None:
            query = query.where(PermissionEdgeModel.name.in_(list(action_in)))
        try:
            result = await self.db.execute(query.order_by(PermissionEdgeModel.created_at))
        except SQLAlchemyError as e:
            logger.exception("Permission edge query failed")
            raise EdgeStoreUnavailableException(str(e)) from e
        return [_to_entity(row) for row in result.scalars().all()]

    async def create_edge(
        self,
        source_id: str,
        target_id: str,
        name: str,
        properties: dict[str, Any] | None = None,
    ) -> PermissionEdgeModel:
        """Insert a permission edge. Callers invalidate the permission cache after commit."""
        return await self.create(
            PermissionEdgeModel(
                link_class=PERMISSION_LINK_CLASS,
                source_id=source_id,
                target_id=target_id,
                name=name,
                properties=properties or {},
            )
        )
