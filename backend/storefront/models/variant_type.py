"""VariantType ORM — a family of variants (e.g. "Size", "Color").

Invariants:
    - name is unique across all variant types
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from storefront.db.base import Base, RecordMixin


class VariantType(RecordMixin, Base):
    __tablename__ = "variant_types"

    name: Mapped[str] = mapped_column(String(200), nullable=False, unique=True)
    type: Mapped[str | None] = mapped_column(String(200), nullable=True)
