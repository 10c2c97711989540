"""Order ORM — a placed order with its line items and totals.

Invariants:
    - items, shipping_address and order_total are stored as JSON snapshots
      (prices at order time, not live product prices)
    - order_status transitions are not enforced here; any OrderStatus value may be set
    - user_id is an opaque reference to the customer account
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, Float, JSON, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from storefront.core.domain_types import OrderStatus
from storefront.db.base import Base, RecordMixin, utcnow


class Order(RecordMixin, Base):
    __tablename__ = "orders"

    user_id: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    order_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )
    order_status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=OrderStatus.PENDING.value,
    )
    items: Mapped[list] = mapped_column(JSON, nullable=False)
    total_price: Mapped[float] = mapped_column(Float, nullable=False)
    shipping_address: Mapped[dict] = mapped_column(JSON, nullable=False)
    payment_method: Mapped[str] = mapped_column(String(20), nullable=False)
    coupon_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), nullable=True,
    )
    order_total: Mapped[dict] = mapped_column(JSON, nullable=False)
    tracking_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
