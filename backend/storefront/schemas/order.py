"""Order Schemas — order placement and status/tracking updates.

Invariants:
    - user_id, items, total_price, shipping_address, payment_method and
      order_total are required on create; items must be non-empty
    - updates touch order_status and tracking_url only
"""

from typing import ClassVar
from uuid import UUID

from pydantic import BaseModel, Field

from storefront.core.domain_types import OrderStatus, PaymentMethod
from storefront.schemas.base import PartialUpdate, RecordRead, UTCDateTime


class OrderItem(BaseModel):
    product_id: UUID
    product_name: str = Field(min_length=1)
    quantity: int = Field(ge=1)
    price: float = Field(ge=0)
    variant: str | None = None


class ShippingAddress(BaseModel):
    phone: str = Field(min_length=1)
    street: str = Field(min_length=1)
    city: str = Field(min_length=1)
    state: str | None = None
    postal_code: str | None = None
    country: str = Field(min_length=1)


class OrderTotal(BaseModel):
    subtotal: float = Field(ge=0)
    discount: float = Field(0, ge=0)
    total: float = Field(ge=0)


class OrderCreate(BaseModel):
    user_id: str = Field(min_length=1, max_length=100)
    order_status: OrderStatus = OrderStatus.PENDING
    items: list[OrderItem] = Field(min_length=1)
    total_price: float = Field(ge=0)
    shipping_address: ShippingAddress
    payment_method: PaymentMethod
    coupon_id: UUID | None = None
    order_total: OrderTotal
    tracking_url: str | None = Field(None, max_length=1000)

    def to_fields(self) -> dict:
        """Column values, with nested models stored as JSON snapshots."""
        fields = self.model_dump(mode="json")
        fields["coupon_id"] = self.coupon_id
        return fields


class OrderUpdate(PartialUpdate):
    clearable: ClassVar[frozenset[str]] = frozenset({"tracking_url"})

    order_status: OrderStatus | None = None
    tracking_url: str | None = Field(None, max_length=1000)


class OrderRead(RecordRead):
    user_id: str
    order_date: UTCDateTime
    order_status: OrderStatus
    items: list[OrderItem]
    total_price: float
    shipping_address: ShippingAddress
    payment_method: PaymentMethod
    coupon_id: UUID | None
    order_total: OrderTotal
    tracking_url: str | None
