"""Product Schemas — create/update bodies and the public read shape.

Invariants:
    - name, quantity, price, category_id, sub_category_id required on create
    - image slots are 1..5 and unique within one body
    - ProductRead exposes variant_ids (from the link table), never the links
"""

from typing import Annotated, ClassVar
from uuid import UUID

from pydantic import BaseModel, Field, StringConstraints, field_validator

from storefront.schemas.base import PartialUpdate, RecordRead

MAX_IMAGES = 5

ProductName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=300)]


class ProductImage(BaseModel):
    image: int = Field(ge=1, le=MAX_IMAGES)
    url: str = Field(min_length=1, max_length=1000)


def _unique_slots(images: list[ProductImage] | None) -> list[ProductImage] | None:
    if images is None:
        return images
    slots = [img.image for img in images]
    if len(slots) != len(set(slots)):
        raise ValueError("image slots must be unique")
    return images


class ProductCreate(BaseModel):
    name: ProductName
    description: str | None = None
    quantity: int = Field(ge=0)
    price: float = Field(gt=0)
    offer_price: float | None = Field(None, ge=0)
    category_id: UUID
    sub_category_id: UUID
    brand_id: UUID | None = None
    variant_type_id: UUID | None = None
    variant_ids: list[UUID] = Field(default_factory=list)
    images: list[ProductImage] = Field(default_factory=list, max_length=MAX_IMAGES)

    @field_validator("images")
    @classmethod
    def unique_image_slots(cls, v):
        return _unique_slots(v)


class ProductUpdate(PartialUpdate):
    clearable: ClassVar[frozenset[str]] = frozenset({
        "description", "offer_price", "brand_id", "variant_type_id",
    })

    name: ProductName | None = None
    description: str | None = None
    quantity: int | None = Field(None, ge=0)
    price: float | None = Field(None, gt=0)
    offer_price: float | None = Field(None, ge=0)
    category_id: UUID | None = None
    sub_category_id: UUID | None = None
    brand_id: UUID | None = None
    variant_type_id: UUID | None = None
    variant_ids: list[UUID] | None = None
    images: list[ProductImage] | None = Field(None, max_length=MAX_IMAGES)

    @field_validator("images")
    @classmethod
    def unique_image_slots(cls, v):
        return _unique_slots(v)


class ProductRead(RecordRead):
    name: str
    description: str | None
    quantity: int
    price: float
    offer_price: float | None
    category_id: UUID
    sub_category_id: UUID
    brand_id: UUID | None
    variant_type_id: UUID | None
    variant_ids: list[UUID]
    images: list[ProductImage]
