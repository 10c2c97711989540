"""Notification Routes — push to all users, track delivery, manage history.

Invariants:
    - send publishes `notification created` only after the provider accepted it
    - track-notification is a read and never publishes
    - all-notification is newest first
"""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.dependencies import get_notification_service, get_notification_writer
from storefront.api.routes.record_queries import list_records
from storefront.core.errors import envelope
from storefront.infrastructure.database import get_db
from storefront.models.notification import Notification
from storefront.schemas.notification import NotificationRead, NotificationSend
from storefront.services.commerce_writers import NotificationWriter
from storefront.services.notification_service import NotificationService

router = APIRouter(prefix="/api/v1/notification", tags=["notifications"])


@router.post("/send-notification")
async def send_notification(
    body: NotificationSend,
    service: NotificationService = Depends(get_notification_service),
):
    data = await service.send(body)
    return envelope(True, "Notification sent successfully.", data)


@router.get("/track-notification/{notification_id}")
async def track_notification(
    notification_id: str,
    service: NotificationService = Depends(get_notification_service),
):
    stats = await service.track(notification_id)
    return envelope(True, "Notification tracking success.", stats.model_dump())


@router.get("/all-notification")
async def list_notifications(db: AsyncSession = Depends(get_db)):
    data = await list_records(db, Notification, NotificationRead, newest_first=True)
    return envelope(True, "Notifications retrieved successfully.", data)


@router.delete("/delete-notification/{record_id}")
async def delete_notification(
    record_id: UUID,
    writer: NotificationWriter = Depends(get_notification_writer),
):
    """Deleting history does not need the push provider."""
    data = await writer.delete(record_id)
    return envelope(True, "Notification deleted successfully.", data)
