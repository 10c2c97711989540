"""Sub-category Routes.

Invariants:
    - category_id is stored as given; the parent is not looked up
    - Delete is refused (400) while brands or products reference the sub-category
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.dependencies import get_sub_category_writer
from storefront.api.routes.record_queries import list_records, read_record
from storefront.core.errors import envelope
from storefront.infrastructure.database import get_db
from storefront.models.sub_category import SubCategory
from storefront.schemas.catalog import (
    SubCategoryCreate, SubCategoryRead, SubCategoryUpdate,
)
from storefront.services.catalog_writers import SubCategoryWriter

router = APIRouter(prefix="/api/v1/sub-categories", tags=["sub-categories"])


@router.get("")
async def list_sub_categories(
    category_id: UUID | None = Query(None),
    db: AsyncSession = Depends(get_db),
):
    """All sub-categories, optionally only those of one category."""
    criteria = [SubCategory.category_id == category_id] if category_id else []
    data = await list_records(db, SubCategory, SubCategoryRead, *criteria)
    return envelope(True, "Sub-categories retrieved successfully.", data)


@router.get("/{sub_category_id}")
async def get_sub_category(sub_category_id: UUID, db: AsyncSession = Depends(get_db)):
    data = await read_record(
        db, SubCategory, SubCategoryRead, sub_category_id, "Sub-category",
    )
    return envelope(True, "Sub-category retrieved successfully.", data)


@router.post("")
async def create_sub_category(
    body: SubCategoryCreate,
    writer: SubCategoryWriter = Depends(get_sub_category_writer),
):
    data = await writer.create(body.model_dump())
    return envelope(True, "Sub-category created successfully.", data)


@router.put("/{sub_category_id}")
async def update_sub_category(
    sub_category_id: UUID,
    body: SubCategoryUpdate,
    writer: SubCategoryWriter = Depends(get_sub_category_writer),
):
    data = await writer.update(sub_category_id, body.changes())
    return envelope(True, "Sub-category updated successfully.", data)


@router.delete("/{sub_category_id}")
async def delete_sub_category(
    sub_category_id: UUID,
    writer: SubCategoryWriter = Depends(get_sub_category_writer),
):
    data = await writer.delete(sub_category_id)
    return envelope(True, "Sub-category deleted successfully.", data)
