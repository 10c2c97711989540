"""Domain Types — enums that replace bare strings across the codebase.

Invariants:
    - All valid states encoded as Enums — no raw string matching
    - Enum values are the exact strings stored in the DB and sent on the wire

Design Decisions:
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

ObserverId = NewType("ObserverId", str)


# ─── Change feed ─────────────────────────────────────────────────

class EntityType(str, Enum):
    """Every record kind whose mutations are announced on the change feed."""
    CATEGORY = "category"
    SUB_CATEGORY = "sub_category"
    BRAND = "brand"
    VARIANT = "variant"
    VARIANT_TYPE = "variant_type"
    PRODUCT = "product"
    COUPON = "coupon"
    POSTER = "poster"
    ORDER = "order"
    PAYMENT = "payment"
    NOTIFICATION = "notification"


class ChangeAction(str, Enum):
    """What happened to the record."""
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"


class ConnectionState(str, Enum):
    """Observer lifecycle: CONNECTED -> DISCONNECTED (terminal)."""
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"


# ─── Commerce ────────────────────────────────────────────────────

class DiscountType(str, Enum):
    FIXED = "fixed"
    PERCENTAGE = "percentage"


class CouponStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class OrderStatus(str, Enum):
    """Order fulfilment states — maps to DB `order_status` column."""
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentMethod(str, Enum):
    COD = "cod"
    PREPAID = "prepaid"


class PaymentProvider(str, Enum):
    STRIPE = "stripe"
    RAZORPAY = "razorpay"
