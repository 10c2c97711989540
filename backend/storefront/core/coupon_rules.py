"""Coupon Rules — pure applicability check for a coupon against a basket.

Invariants:
    - Checks run in a fixed order: exists, not expired, active, minimum purchase,
      scope (category / sub-category / product)
    - A coupon with no scope restriction applies to every order
    - A restricted coupon applies only if EVERY product matches EVERY restriction
    - Pure: the caller passes `now`; naive datetimes are read as UTC
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable

from storefront.core.domain_types import CouponStatus


@dataclass(frozen=True)
class CouponCheck:
    """Outcome of a coupon check — message is user-facing."""
    applicable: bool
    message: str


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _is_restricted(coupon: Any) -> bool:
    return any((
        coupon.applicable_category_id,
        coupon.applicable_sub_category_id,
        coupon.applicable_product_id,
    ))


def _product_matches(coupon: Any, product: Any) -> bool:
    if coupon.applicable_category_id and coupon.applicable_category_id != product.category_id:
        return False
    if coupon.applicable_sub_category_id and coupon.applicable_sub_category_id != product.sub_category_id:
        return False
    if coupon.applicable_product_id and coupon.applicable_product_id != product.id:
        return False
    return True


def check_coupon(
    coupon: Any | None,
    products: Iterable[Any],
    purchase_amount: float,
    now: datetime,
) -> CouponCheck:
    """Decide whether `coupon` can be applied to a purchase of `products`."""
    if coupon is None:
        return CouponCheck(False, "Coupon not found.")
    if _as_utc(coupon.end_date) < _as_utc(now):
        return CouponCheck(False, "Coupon is expired.")
    if coupon.status != CouponStatus.ACTIVE.value:
        return CouponCheck(False, "Coupon is inactive.")
    minimum = coupon.minimum_purchase_amount
    if minimum and purchase_amount < minimum:
        return CouponCheck(False, "Minimum purchase amount not met.")
    if not _is_restricted(coupon):
        return CouponCheck(True, "Coupon is applicable for all orders.")

    products = list(products)
    if products and all(_product_matches(coupon, p) for p in products):
        return CouponCheck(True, "Coupon is applicable for the provided products.")
    return CouponCheck(False, "Coupon is not applicable for the provided products.")


def apply_discount(coupon: Any, amount: float) -> float:
    """Discount granted by an applicable coupon, never more than `amount`."""
    if coupon.discount_type == "percentage":
        discount = amount * coupon.discount_amount / 100
    else:
        discount = coupon.discount_amount
    return round(min(max(discount, 0.0), amount), 2)
