"""Product ORM — the sellable record, referencing every catalog level.

Invariants:
    - category_id and sub_category_id are required; brand / variant type optional
    - images holds at most five {"image": slot 1..5, "url": str} entries
    - variant links are owned by the product (deleted with it)
    - references are plain UUID columns (document-store semantics, no DB foreign keys)
"""

import uuid

from sqlalchemy import Float, ForeignKey, Integer, JSON, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storefront.db.base import Base, RecordMixin


class Product(RecordMixin, Base):
    __tablename__ = "products"

    name: Mapped[str] = mapped_column(String(300), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    offer_price: Mapped[float | None] = mapped_column(Float, nullable=True)
    category_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, index=True,
    )
    sub_category_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, index=True,
    )
    brand_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), nullable=True, index=True,
    )
    variant_type_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), nullable=True, index=True,
    )
    images: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    variant_links: Mapped[list["ProductVariantLink"]] = relationship(
        "ProductVariantLink", back_populates="product",
        cascade="all, delete-orphan", lazy="selectin",
    )

    @property
    def variant_ids(self) -> list[uuid.UUID]:
        return [link.variant_id for link in self.variant_links]


class ProductVariantLink(Base):
    """One variant offered by a product."""
    __tablename__ = "product_variants"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    product_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    variant_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, index=True,
    )

    product: Mapped[Product] = relationship(
        "Product", back_populates="variant_links",
    )
