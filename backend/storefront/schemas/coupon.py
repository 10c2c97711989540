"""Coupon Schemas — coupon CRUD bodies and the applicability check request.

Invariants:
    - percentage discounts are capped at 100
    - scope ids may be cleared with an explicit null on update
"""

from datetime import datetime
from typing import Annotated, ClassVar
from uuid import UUID

from pydantic import BaseModel, Field, StringConstraints, model_validator

from storefront.core.domain_types import CouponStatus, DiscountType
from storefront.schemas.base import PartialUpdate, RecordRead, UTCDateTime

CouponCode = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]


def _check_percentage(discount_type: DiscountType | None, amount: float | None) -> None:
    if discount_type == DiscountType.PERCENTAGE and amount is not None and amount > 100:
        raise ValueError("percentage discount cannot exceed 100")


class CouponCreate(BaseModel):
    coupon_code: CouponCode
    discount_type: DiscountType
    discount_amount: float = Field(gt=0)
    minimum_purchase_amount: float | None = Field(None, ge=0)
    end_date: datetime
    status: CouponStatus
    applicable_category_id: UUID | None = None
    applicable_sub_category_id: UUID | None = None
    applicable_product_id: UUID | None = None

    @model_validator(mode="after")
    def validate_discount(self):
        _check_percentage(self.discount_type, self.discount_amount)
        return self


class CouponUpdate(PartialUpdate):
    clearable: ClassVar[frozenset[str]] = frozenset({
        "minimum_purchase_amount", "applicable_category_id",
        "applicable_sub_category_id", "applicable_product_id",
    })

    coupon_code: CouponCode | None = None
    discount_type: DiscountType | None = None
    discount_amount: float | None = Field(None, gt=0)
    minimum_purchase_amount: float | None = Field(None, ge=0)
    end_date: datetime | None = None
    status: CouponStatus | None = None
    applicable_category_id: UUID | None = None
    applicable_sub_category_id: UUID | None = None
    applicable_product_id: UUID | None = None

    @model_validator(mode="after")
    def validate_discount(self):
        _check_percentage(self.discount_type, self.discount_amount)
        return self


class CouponRead(RecordRead):
    coupon_code: str
    discount_type: DiscountType
    discount_amount: float
    minimum_purchase_amount: float | None
    end_date: UTCDateTime
    status: CouponStatus
    applicable_category_id: UUID | None
    applicable_sub_category_id: UUID | None
    applicable_product_id: UUID | None


class CouponCheckRequest(BaseModel):
    coupon_code: CouponCode
    product_ids: list[UUID] = Field(default_factory=list)
    purchase_amount: float = Field(ge=0)
