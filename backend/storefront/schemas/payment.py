"""Payment Schemas — gateway session requests and responses."""

from pydantic import BaseModel, Field


class StripeAddress(BaseModel):
    line1: str | None = None
    line2: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None
    country: str | None = None


class StripePaymentRequest(BaseModel):
    email: str = Field(min_length=3, max_length=320)
    name: str = Field(min_length=1)
    address: StripeAddress | None = None
    amount: int = Field(gt=0, description="Amount in the currency's smallest unit")
    currency: str = Field(min_length=3, max_length=3)
    description: str | None = None


class StripePaymentSession(BaseModel):
    payment_intent: str
    ephemeral_key: str
    customer: str
    publishable_key: str


class RazorpayPaymentSession(BaseModel):
    key: str
