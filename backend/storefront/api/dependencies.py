"""API Dependencies — wiring of app-scoped services into request handlers.

Invariants:
    - The broadcaster and gateway clients are created once in the lifespan and
      read from app.state; handlers never construct them
    - Writers are request-scoped: one AsyncSession and the shared broadcaster
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.config import get_settings
from storefront.core.errors import ExternalServiceError
from storefront.infrastructure.database import get_db
from storefront.infrastructure.onesignal_client import OneSignalClient
from storefront.infrastructure.stripe_client import StripeClient
from storefront.services.catalog_writers import (
    BrandWriter, CategoryWriter, SubCategoryWriter, VariantTypeWriter, VariantWriter,
)
from storefront.services.change_broadcaster import ChangeBroadcaster
from storefront.services.commerce_writers import (
    CouponWriter, NotificationWriter, OrderWriter, PosterWriter,
)
from storefront.services.notification_service import NotificationService
from storefront.services.payment_service import PaymentService
from storefront.services.product_writer import ProductWriter


def get_broadcaster(request: Request) -> ChangeBroadcaster:
    return request.app.state.broadcaster


def get_stripe_client(request: Request) -> StripeClient | None:
    return getattr(request.app.state, "stripe", None)


def get_push_client(request: Request) -> OneSignalClient:
    client = getattr(request.app.state, "push", None)
    if client is None:
        raise ExternalServiceError("OneSignal", "push provider not configured")
    return client


def _writer(writer_cls):
    def provide(
        db: AsyncSession = Depends(get_db),
        broadcaster: ChangeBroadcaster = Depends(get_broadcaster),
    ):
        return writer_cls(db, broadcaster)
    provide.__name__ = f"get_{writer_cls.__name__}"
    return provide


get_category_writer = _writer(CategoryWriter)
get_sub_category_writer = _writer(SubCategoryWriter)
get_brand_writer = _writer(BrandWriter)
get_variant_type_writer = _writer(VariantTypeWriter)
get_variant_writer = _writer(VariantWriter)
get_product_writer = _writer(ProductWriter)
get_coupon_writer = _writer(CouponWriter)
get_poster_writer = _writer(PosterWriter)
get_order_writer = _writer(OrderWriter)
get_notification_writer = _writer(NotificationWriter)


def get_payment_service(
    broadcaster: ChangeBroadcaster = Depends(get_broadcaster),
    stripe: StripeClient | None = Depends(get_stripe_client),
) -> PaymentService:
    settings = get_settings()
    return PaymentService(
        broadcaster, stripe, settings.stripe_publishable_key, settings.razorpay_key,
    )


def get_notification_service(
    writer: NotificationWriter = Depends(get_notification_writer),
    push: OneSignalClient = Depends(get_push_client),
) -> NotificationService:
    return NotificationService(writer, push)
