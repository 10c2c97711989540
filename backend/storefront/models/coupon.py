"""Coupon ORM — discount code with optional catalog scope.

Invariants:
    - coupon_code is unique
    - discount_type in {fixed, percentage}; status in {active, inactive}
    - at most one of each scope reference; all scopes empty = applies to every order
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, Float, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from storefront.core.domain_types import CouponStatus
from storefront.db.base import Base, RecordMixin


class Coupon(RecordMixin, Base):
    __tablename__ = "coupons"

    coupon_code: Mapped[str] = mapped_column(
        String(100), nullable=False, unique=True,
    )
    discount_type: Mapped[str] = mapped_column(String(20), nullable=False)
    discount_amount: Mapped[float] = mapped_column(Float, nullable=False)
    minimum_purchase_amount: Mapped[float | None] = mapped_column(
        Float, nullable=True,
    )
    end_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=CouponStatus.ACTIVE.value,
    )
    applicable_category_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), nullable=True,
    )
    applicable_sub_category_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), nullable=True,
    )
    applicable_product_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), nullable=True,
    )
