"""Stripe Client — the three REST calls behind a mobile PaymentSheet.

Invariants:
    - Requests are form-encoded with bearer secret-key auth (Stripe REST convention)
    - Nested params are flattened to bracket keys: address[line1], ...
    - The ephemeral key is created with the configured Stripe-Version header
    - Gateway failures surface as ExternalServiceError carrying Stripe's message
"""

from typing import Any

import httpx

from storefront.infrastructure.http_retry import ResilientHTTPClient


def form_params(params: dict[str, Any], prefix: str = "") -> dict[str, str]:
    """Flatten nested dicts into Stripe's bracketed form keys, skipping None."""
    flat: dict[str, str] = {}
    for key, value in params.items():
        name = f"{prefix}[{key}]" if prefix else key
        if value is None:
            continue
        if isinstance(value, dict):
            flat.update(form_params(value, name))
        elif isinstance(value, bool):
            flat[name] = "true" if value else "false"
        else:
            flat[name] = str(value)
    return flat


class StripeClient(ResilientHTTPClient):
    """Customers, ephemeral keys and payment intents."""

    service = "Stripe"

    def __init__(
        self,
        secret_key: str,
        api_version: str,
        base_url: str = "https://api.stripe.com/v1",
        timeout_seconds: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
        **retry_options,
    ):
        super().__init__(
            httpx.AsyncClient(
                base_url=base_url,
                headers={"Authorization": f"Bearer {secret_key}"},
                timeout=timeout_seconds,
                transport=transport,
            ),
            **retry_options,
        )
        self.api_version = api_version

    async def create_customer(self, email: str, name: str, address: dict | None) -> dict:
        return await self.request(
            "POST", "/customers",
            data=form_params({"email": email, "name": name, "address": address}),
        )

    async def create_ephemeral_key(self, customer_id: str) -> dict:
        return await self.request(
            "POST", "/ephemeral_keys",
            data=form_params({"customer": customer_id}),
            headers={"Stripe-Version": self.api_version},
        )

    async def create_payment_intent(
        self, amount: int, currency: str, customer_id: str, description: str | None,
    ) -> dict:
        return await self.request(
            "POST", "/payment_intents",
            data=form_params({
                "amount": amount,
                "currency": currency,
                "customer": customer_id,
                "description": description,
                "automatic_payment_methods": {"enabled": True},
            }),
        )

    def _error_message(self, response: httpx.Response) -> str:
        try:
            return response.json()["error"]["message"]
        except (ValueError, KeyError, TypeError):
            return f"HTTP {response.status_code}"
