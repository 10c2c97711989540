"""Brand Routes."""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.dependencies import get_brand_writer
from storefront.api.routes.record_queries import list_records, read_record
from storefront.core.errors import envelope
from storefront.infrastructure.database import get_db
from storefront.models.brand import Brand
from storefront.schemas.catalog import BrandCreate, BrandRead, BrandUpdate
from storefront.services.catalog_writers import BrandWriter

router = APIRouter(prefix="/api/v1/brands", tags=["brands"])


@router.get("")
async def list_brands(db: AsyncSession = Depends(get_db)):
    data = await list_records(db, Brand, BrandRead)
    return envelope(True, "Brands retrieved successfully.", data)


@router.get("/{brand_id}")
async def get_brand(brand_id: UUID, db: AsyncSession = Depends(get_db)):
    data = await read_record(db, Brand, BrandRead, brand_id, "Brand")
    return envelope(True, "Brand retrieved successfully.", data)


@router.post("")
async def create_brand(body: BrandCreate, writer: BrandWriter = Depends(get_brand_writer)):
    data = await writer.create(body.model_dump())
    return envelope(True, "Brand created successfully.", data)


@router.put("/{brand_id}")
async def update_brand(
    brand_id: UUID, body: BrandUpdate, writer: BrandWriter = Depends(get_brand_writer),
):
    data = await writer.update(brand_id, body.changes())
    return envelope(True, "Brand updated successfully.", data)


@router.delete("/{brand_id}")
async def delete_brand(brand_id: UUID, writer: BrandWriter = Depends(get_brand_writer)):
    data = await writer.delete(brand_id)
    return envelope(True, "Brand deleted successfully.", data)
