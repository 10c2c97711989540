"""Notification Service — push send and delivery tracking.

Invariants:
    - send: the provider accepts the push first, then the record is stored and
      `notification created` is published; a provider failure stores nothing
    - track is a read: it never publishes
"""

import logging

from storefront.infrastructure.onesignal_client import OneSignalClient
from storefront.schemas.notification import DeliveryStats, NotificationSend
from storefront.services.commerce_writers import NotificationWriter

logger = logging.getLogger(__name__)


class NotificationService:
    def __init__(self, writer: NotificationWriter, push: OneSignalClient):
        self.writer = writer
        self.push = push

    async def send(self, body: NotificationSend) -> dict:
        notification_id = await self.push.send_to_all(
            body.title, body.description, body.image_url,
        )
        logger.info(
            "Notification sent to all users",
            extra={"record_id": notification_id, "service": "OneSignal"},
        )
        return await self.writer.create({
            "notification_id": notification_id,
            "title": body.title,
            "description": body.description,
            "image_url": body.image_url,
        })

    async def track(self, notification_id: str) -> DeliveryStats:
        android = await self.push.android_stats(notification_id)
        return DeliveryStats(
            platform="Android",
            success_delivery=android.get("successful") or 0,
            failed_delivery=android.get("failed") or 0,
            errored_delivery=android.get("errored") or 0,
            opened_notification=android.get("converted") or 0,
        )
