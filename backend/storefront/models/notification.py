"""Notification ORM — record of a push notification sent through the provider.

Invariants:
    - notification_id is the provider's id, used to fetch delivery stats
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from storefront.db.base import Base, RecordMixin


class Notification(RecordMixin, Base):
    __tablename__ = "notifications"

    notification_id: Mapped[str] = mapped_column(
        String(100), nullable=False, index=True,
    )
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    image_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
