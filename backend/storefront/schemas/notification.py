"""Notification Schemas — push send request, stored record, delivery stats."""

from pydantic import BaseModel, Field

from storefront.schemas.base import RecordRead


class NotificationSend(BaseModel):
    title: str = Field(min_length=1, max_length=300)
    description: str = Field(min_length=1)
    image_url: str | None = Field(None, max_length=1000)


class NotificationRead(RecordRead):
    notification_id: str
    title: str
    description: str
    image_url: str | None


class DeliveryStats(BaseModel):
    platform: str
    success_delivery: int = 0
    failed_delivery: int = 0
    errored_delivery: int = 0
    opened_notification: int = 0
