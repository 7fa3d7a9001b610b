"""Permission edge ORM model (directed link between identifiers)."""

from typing import Any

from sqlalchemy import JSON, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from permgraph.core.constants import PERMISSION_LINK_CLASS
from permgraph.infrastructure.persistence.database import Base
from permgraph.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class PermissionEdgeModel(CuidMixin, TimestampMixin, Base):
    """Link row. Table: permission_edge.

    source_id has the capability named by ``name`` (can_read / can_write /
    can_manage) on target_id. Only rows with link_class 'permission' are
    read by the edge store.
    """

    __tablename__ = "permission_edge"

    link_class: Mapped[str] = mapped_column(
        String, nullable=False, default=PERMISSION_LINK_CLASS
    )
    name: Mapped[str] = mapped_column(String, nullable=False)
    source_id: Mapped[str] = mapped_column(String, nullable=False)
    target_id: Mapped[str] = mapped_column(String, nullable=False)
    properties: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    __table_args__ = (
        Index("ix_permission_edge_source", "link_class", "source_id"),
        Index("ix_permission_edge_target", "link_class", "target_id", "name"),
    )
