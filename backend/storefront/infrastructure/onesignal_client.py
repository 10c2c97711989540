"""OneSignal Client — push to every subscriber and read back delivery stats.

Invariants:
    - Notifications target the "All" segment, English headings/contents only
    - big_picture is sent only when an image URL is given
    - A response without an id is a failed send
"""

import httpx

from storefront.core.errors import ExternalServiceError
from storefront.infrastructure.http_retry import ResilientHTTPClient


class OneSignalClient(ResilientHTTPClient):
    service = "OneSignal"

    def __init__(
        self,
        app_id: str,
        rest_api_key: str,
        base_url: str = "https://onesignal.com/api/v1",
        timeout_seconds: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
        **retry_options,
    ):
        super().__init__(
            httpx.AsyncClient(
                base_url=base_url,
                headers={"Authorization": f"Basic {rest_api_key}"},
                timeout=timeout_seconds,
                transport=transport,
            ),
            **retry_options,
        )
        self.app_id = app_id

    async def send_to_all(self, title: str, description: str, image_url: str | None = None) -> str:
        """Returns the provider's notification id."""
        body = {
            "app_id": self.app_id,
            "contents": {"en": description},
            "headings": {"en": title},
            "included_segments": ["All"],
        }
        if image_url:
            body["big_picture"] = image_url
        result = await self.request("POST", "/notifications", json=body)
        notification_id = result.get("id")
        if not notification_id:
            raise ExternalServiceError(self.service, "notification was not created")
        return notification_id

    async def android_stats(self, notification_id: str) -> dict:
        """Android entry of platform_delivery_stats ({} when nothing was delivered)."""
        result = await self.request(
            "GET", f"/notifications/{notification_id}",
            params={"app_id": self.app_id},
        )
        stats = result.get("platform_delivery_stats") or {}
        return stats.get("android") or {}

    def _error_message(self, response: httpx.Response) -> str:
        try:
            errors = response.json()["errors"]
            return "; ".join(str(e) for e in errors) if isinstance(errors, list) else str(errors)
        except (ValueError, KeyError, TypeError):
            return f"HTTP {response.status_code}"
