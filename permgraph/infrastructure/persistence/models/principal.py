"""Principal ORM model."""

from sqlalchemy import Boolean, String, text
from sqlalchemy.orm import Mapped, mapped_column

from permgraph.infrastructure.persistence.database import Base
from permgraph.infrastructure.persistence.models.mixins import TimestampMixin


class PrincipalModel(TimestampMixin, Base):
    """Principal (user). Table: principal. Ids are opaque strings assigned upstream."""

    __tablename__ = "principal"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    is_admin: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("false")
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("true")
    )
