"""Poster Schemas."""

from typing import Annotated

from pydantic import BaseModel, Field, StringConstraints

from storefront.schemas.base import PartialUpdate, RecordRead

PosterName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]


class PosterCreate(BaseModel):
    poster_name: PosterName
    image_url: str | None = Field(None, max_length=1000)


class PosterUpdate(PartialUpdate):
    poster_name: PosterName | None = None
    image_url: str | None = Field(None, min_length=1, max_length=1000)


class PosterRead(RecordRead):
    poster_name: str
    image_url: str
