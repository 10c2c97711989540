"""Poster ORM — promotional banner shown on the storefront home screen."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from storefront.db.base import Base, RecordMixin
from storefront.models.category import NO_IMAGE_URL


class Poster(RecordMixin, Base):
    __tablename__ = "posters"

    poster_name: Mapped[str] = mapped_column(String(200), nullable=False)
    image_url: Mapped[str] = mapped_column(
        String(1000), nullable=False, default=NO_IMAGE_URL,
    )
