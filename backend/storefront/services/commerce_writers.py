"""Commerce Writers — coupons, posters, orders and notification records.

Invariants:
    - coupon_code is unique across coupons
    - a percentage coupon never ends up above 100, even when only one of
      discount_type / discount_amount is updated
    - notification records are created by the send flow and never edited
"""

from uuid import UUID

from storefront.core.domain_types import DiscountType, EntityType
from storefront.core.errors import ConflictError, ValidationError
from storefront.models.coupon import Coupon
from storefront.models.notification import Notification
from storefront.models.order import Order
from storefront.models.poster import Poster
from storefront.schemas.coupon import CouponRead
from storefront.schemas.notification import NotificationRead
from storefront.schemas.order import OrderRead
from storefront.schemas.poster import PosterRead
from storefront.services.write_adapter import WriteAdapter, column_values, count_where


class CouponWriter(WriteAdapter[Coupon]):
    model = Coupon
    entity_type = EntityType.COUPON
    read_schema = CouponRead
    label = "Coupon"

    async def _ensure_code_free(self, code: str, exclude_id: UUID | None = None) -> None:
        criteria = [Coupon.coupon_code == code]
        if exclude_id is not None:
            criteria.append(Coupon.id != exclude_id)
        if await count_where(self.db, Coupon, *criteria):
            raise ConflictError("Coupon code already exists.")

    async def _check_create(self, fields: dict) -> None:
        await self._ensure_code_free(fields["coupon_code"])

    async def _check_update(self, record: Coupon, changes: dict) -> None:
        if "coupon_code" in changes and changes["coupon_code"] != record.coupon_code:
            await self._ensure_code_free(changes["coupon_code"], exclude_id=record.id)
        merged = {**column_values({
            "discount_type": record.discount_type,
            "discount_amount": record.discount_amount,
        }), **column_values(changes)}
        if (merged["discount_type"] == DiscountType.PERCENTAGE.value
                and merged["discount_amount"] > 100):
            raise ValidationError(
                "Percentage discount cannot exceed 100.", field="discount_amount",
            )


class PosterWriter(WriteAdapter[Poster]):
    model = Poster
    entity_type = EntityType.POSTER
    read_schema = PosterRead
    label = "Poster"


class OrderWriter(WriteAdapter[Order]):
    model = Order
    entity_type = EntityType.ORDER
    read_schema = OrderRead
    label = "Order"


class NotificationWriter(WriteAdapter[Notification]):
    model = Notification
    entity_type = EntityType.NOTIFICATION
    read_schema = NotificationRead
    label = "Notification"
