"""Catalog Schemas — categories, sub-categories, brands, variant types and variants."""

from typing import Annotated, ClassVar
from uuid import UUID

from pydantic import BaseModel, Field, StringConstraints

from storefront.schemas.base import PartialUpdate, RecordRead

Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]


# --- Category ----------------------------------------------------------------

class CategoryCreate(BaseModel):
    name: Name
    image: str | None = Field(None, max_length=1000)


class CategoryUpdate(PartialUpdate):
    name: Name | None = None
    image: str | None = Field(None, min_length=1, max_length=1000)


class CategoryRead(RecordRead):
    name: str
    image: str


# --- SubCategory -------------------------------------------------------------

class SubCategoryCreate(BaseModel):
    name: Name
    category_id: UUID


class SubCategoryUpdate(PartialUpdate):
    name: Name | None = None
    category_id: UUID | None = None


class SubCategoryRead(RecordRead):
    name: str
    category_id: UUID


# --- Brand -------------------------------------------------------------------

class BrandCreate(BaseModel):
    name: Name
    sub_category_id: UUID


class BrandUpdate(PartialUpdate):
    name: Name | None = None
    sub_category_id: UUID | None = None


class BrandRead(RecordRead):
    name: str
    sub_category_id: UUID


# --- VariantType -------------------------------------------------------------

class VariantTypeCreate(BaseModel):
    name: Name
    type: str | None = Field(None, max_length=200)


class VariantTypeUpdate(PartialUpdate):
    clearable: ClassVar[frozenset[str]] = frozenset({"type"})

    name: Name | None = None
    type: str | None = Field(None, max_length=200)


class VariantTypeRead(RecordRead):
    name: str
    type: str | None


# --- Variant -----------------------------------------------------------------

class VariantCreate(BaseModel):
    name: Name
    variant_type_id: UUID


class VariantUpdate(PartialUpdate):
    name: Name | None = None
    variant_type_id: UUID | None = None


class VariantRead(RecordRead):
    name: str
    variant_type_id: UUID
