"""Variant Type Routes — e.g. "Size", "Color".

Invariants:
    - name is unique across variant types (400 on duplicate)
    - Delete is refused (400) while variants or products reference the type
"""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.dependencies import get_variant_type_writer
from storefront.api.routes.record_queries import list_records, read_record
from storefront.core.errors import envelope
from storefront.infrastructure.database import get_db
from storefront.models.variant_type import VariantType
from storefront.schemas.catalog import (
    VariantTypeCreate, VariantTypeRead, VariantTypeUpdate,
)
from storefront.services.catalog_writers import VariantTypeWriter

router = APIRouter(prefix="/api/v1/variant-types", tags=["variant-types"])


@router.get("")
async def list_variant_types(db: AsyncSession = Depends(get_db)):
    data = await list_records(db, VariantType, VariantTypeRead)
    return envelope(True, "Variant types retrieved successfully.", data)


@router.get("/{variant_type_id}")
async def get_variant_type(variant_type_id: UUID, db: AsyncSession = Depends(get_db)):
    data = await read_record(
        db, VariantType, VariantTypeRead, variant_type_id, "Variant type",
    )
    return envelope(True, "Variant type retrieved successfully.", data)


@router.post("")
async def create_variant_type(
    body: VariantTypeCreate,
    writer: VariantTypeWriter = Depends(get_variant_type_writer),
):
    data = await writer.create(body.model_dump())
    return envelope(True, "Variant type created successfully.", data)


@router.put("/{variant_type_id}")
async def update_variant_type(
    variant_type_id: UUID,
    body: VariantTypeUpdate,
    writer: VariantTypeWriter = Depends(get_variant_type_writer),
):
    data = await writer.update(variant_type_id, body.changes())
    return envelope(True, "Variant type updated successfully.", data)


@router.delete("/{variant_type_id}")
async def delete_variant_type(
    variant_type_id: UUID,
    writer: VariantTypeWriter = Depends(get_variant_type_writer),
):
    data = await writer.delete(variant_type_id)
    return envelope(True, "Variant type deleted successfully.", data)
