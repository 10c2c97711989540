"""SubCategory ORM — second level of the catalog tree.

Invariants:
    - category_id is a plain reference (no DB foreign key, no existence check)
"""

import uuid

from sqlalchemy import String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from storefront.db.base import Base, RecordMixin


class SubCategory(RecordMixin, Base):
    __tablename__ = "sub_categories"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    category_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, index=True,
    )
