"""Category ORM — top level of the catalog tree.

Invariants:
    - name is non-nullable
    - image defaults to "no_url" (uploads are handled outside this service)
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from storefront.db.base import Base, RecordMixin

NO_IMAGE_URL = "no_url"


class Category(RecordMixin, Base):
    __tablename__ = "categories"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    image: Mapped[str] = mapped_column(
        String(1000), nullable=False, default=NO_IMAGE_URL,
    )
