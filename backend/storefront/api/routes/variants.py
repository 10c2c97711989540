"""Variant Routes — concrete values of a variant type ("XL", "Red").

Invariants:
    - (variant_type_id, name) is unique (400 on duplicate)
    - Delete is refused (400) while any product offers the variant
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.dependencies import get_variant_writer
from storefront.api.routes.record_queries import list_records, read_record
from storefront.core.errors import envelope
from storefront.infrastructure.database import get_db
from storefront.models.variant import Variant
from storefront.schemas.catalog import VariantCreate, VariantRead, VariantUpdate
from storefront.services.catalog_writers import VariantWriter

router = APIRouter(prefix="/api/v1/variants", tags=["variants"])


@router.get("")
async def list_variants(
    variant_type_id: UUID | None = Query(None),
    db: AsyncSession = Depends(get_db),
):
    criteria = [Variant.variant_type_id == variant_type_id] if variant_type_id else []
    data = await list_records(db, Variant, VariantRead, *criteria)
    return envelope(True, "Variants retrieved successfully.", data)


@router.get("/{variant_id}")
async def get_variant(variant_id: UUID, db: AsyncSession = Depends(get_db)):
    data = await read_record(db, Variant, VariantRead, variant_id, "Variant")
    return envelope(True, "Variant retrieved successfully.", data)


@router.post("")
async def create_variant(
    body: VariantCreate, writer: VariantWriter = Depends(get_variant_writer),
):
    data = await writer.create(body.model_dump())
    return envelope(True, "Variant created successfully.", data)


@router.put("/{variant_id}")
async def update_variant(
    variant_id: UUID,
    body: VariantUpdate,
    writer: VariantWriter = Depends(get_variant_writer),
):
    data = await writer.update(variant_id, body.changes())
    return envelope(True, "Variant updated successfully.", data)


@router.delete("/{variant_id}")
async def delete_variant(
    variant_id: UUID, writer: VariantWriter = Depends(get_variant_writer),
):
    data = await writer.delete(variant_id)
    return envelope(True, "Variant deleted successfully.", data)
