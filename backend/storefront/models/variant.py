"""Variant ORM — one value of a variant type (e.g. "XL").

Invariants:
    - (variant_type_id, name) is unique
"""

import uuid

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from storefront.db.base import Base, RecordMixin


class Variant(RecordMixin, Base):
    __tablename__ = "variants"
    __table_args__ = (
        UniqueConstraint("variant_type_id", "name", name="uq_variant_type_name"),
    )

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    variant_type_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, index=True,
    )
