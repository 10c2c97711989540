"""Payment Service — gateway session setup for the mobile checkout.

Invariants:
    - Nothing is persisted; the change feed gets a non-sensitive summary only
      (never client secrets, ephemeral keys or gateway keys)
    - Success publishes `payment created`; a gateway failure publishes
      `payment updated` with status "failed" and re-raises ExternalServiceError
    - Missing credentials fail before any gateway call
"""

import logging

from storefront.core.change_event import ChangeEvent
from storefront.core.domain_types import ChangeAction, EntityType, PaymentProvider
from storefront.core.errors import ExternalServiceError
from storefront.infrastructure.stripe_client import StripeClient
from storefront.schemas.payment import (
    RazorpayPaymentSession, StripePaymentRequest, StripePaymentSession,
)
from storefront.services.change_broadcaster import ChangeBroadcaster

logger = logging.getLogger(__name__)


class PaymentService:
    def __init__(
        self,
        broadcaster: ChangeBroadcaster,
        stripe: StripeClient | None,
        stripe_publishable_key: str,
        razorpay_key: str,
    ):
        self.broadcaster = broadcaster
        self.stripe = stripe
        self.stripe_publishable_key = stripe_publishable_key
        self.razorpay_key = razorpay_key

    async def start_stripe_payment(self, body: StripePaymentRequest) -> StripePaymentSession:
        summary = {
            "provider": PaymentProvider.STRIPE.value,
            "email": body.email,
            "amount": body.amount,
            "currency": body.currency,
        }
        try:
            if self.stripe is None:
                raise ExternalServiceError("Stripe", "gateway not configured")
            address = body.address.model_dump(exclude_none=True) if body.address else None
            customer = await self.stripe.create_customer(body.email, body.name, address)
            ephemeral_key = await self.stripe.create_ephemeral_key(customer["id"])
            intent = await self.stripe.create_payment_intent(
                body.amount, body.currency, customer["id"], body.description,
            )
            session = StripePaymentSession(
                payment_intent=intent["client_secret"],
                ephemeral_key=ephemeral_key["secret"],
                customer=customer["id"],
                publishable_key=self.stripe_publishable_key,
            )
        except ExternalServiceError as e:
            self._announce(ChangeAction.UPDATED, {**summary, "status": "failed", "error": e.message})
            raise
        except KeyError as e:
            error = ExternalServiceError("Stripe", f"unexpected response, missing {e}")
            self._announce(ChangeAction.UPDATED, {**summary, "status": "failed", "error": error.message})
            raise error
        self._announce(ChangeAction.CREATED, {**summary, "status": "initiated"})
        return session

    def start_razorpay_payment(self) -> RazorpayPaymentSession:
        summary = {"provider": PaymentProvider.RAZORPAY.value}
        if not self.razorpay_key:
            error = ExternalServiceError("Razorpay", "gateway not configured")
            self._announce(ChangeAction.UPDATED, {**summary, "status": "failed", "error": error.message})
            raise error
        self._announce(ChangeAction.CREATED, {**summary, "status": "initiated"})
        return RazorpayPaymentSession(key=self.razorpay_key)

    def _announce(self, action: ChangeAction, payload: dict) -> None:
        try:
            self.broadcaster.publish(ChangeEvent(EntityType.PAYMENT, action, payload))
        except Exception as e:
            logger.error(
                f"Publish failed after payment {action.value}: {e}",
                extra={"entity_type": EntityType.PAYMENT.value, "action": action.value},
                exc_info=True,
            )
