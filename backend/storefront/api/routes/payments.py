"""Payment Routes — session setup for the Stripe PaymentSheet and Razorpay checkout."""

from fastapi import APIRouter, Depends

from storefront.api.dependencies import get_payment_service
from storefront.core.errors import envelope
from storefront.schemas.payment import StripePaymentRequest
from storefront.services.payment_service import PaymentService

router = APIRouter(prefix="/api/v1/payment", tags=["payments"])


@router.post("/stripe")
async def stripe_payment(
    body: StripePaymentRequest,
    service: PaymentService = Depends(get_payment_service),
):
    session = await service.start_stripe_payment(body)
    return envelope(True, "Stripe payment initiated.", session.model_dump())


@router.post("/razorpay")
async def razorpay_payment(service: PaymentService = Depends(get_payment_service)):
    session = service.start_razorpay_payment()
    return envelope(True, "Razorpay payment initiated.", session.model_dump())
