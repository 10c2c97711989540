"""Brand ORM — belongs to a sub-category; deletion blocked while products use it."""

import uuid

from sqlalchemy import String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from storefront.db.base import Base, RecordMixin


class Brand(RecordMixin, Base):
    __tablename__ = "brands"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    sub_category_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, index=True,
    )
