"""Category Routes — CRUD for the top level of the catalog.

Invariants:
    - Every write goes through CategoryWriter (one commit, then one ChangeEvent)
    - Delete is refused (400) while sub-categories or products reference the category
    - image defaults to "no_url" when not given
"""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.dependencies import get_category_writer
from storefront.api.routes.record_queries import list_records, read_record
from storefront.core.errors import envelope
from storefront.infrastructure.database import get_db
from storefront.models.category import Category
from storefront.schemas.catalog import CategoryCreate, CategoryRead, CategoryUpdate
from storefront.services.catalog_writers import CategoryWriter

router = APIRouter(prefix="/api/v1/categories", tags=["categories"])


@router.get("")
async def list_categories(db: AsyncSession = Depends(get_db)):
    data = await list_records(db, Category, CategoryRead)
    return envelope(True, "Categories retrieved successfully.", data)


@router.get("/{category_id}")
async def get_category(category_id: UUID, db: AsyncSession = Depends(get_db)):
    data = await read_record(db, Category, CategoryRead, category_id, "Category")
    return envelope(True, "Category retrieved successfully.", data)


@router.post("")
async def create_category(
    body: CategoryCreate, writer: CategoryWriter = Depends(get_category_writer),
):
    data = await writer.create(body.model_dump())
    return envelope(True, "Category created successfully.", data)


@router.put("/{category_id}")
async def update_category(
    category_id: UUID,
    body: CategoryUpdate,
    writer: CategoryWriter = Depends(get_category_writer),
):
    data = await writer.update(category_id, body.changes())
    return envelope(True, "Category updated successfully.", data)


@router.delete("/{category_id}")
async def delete_category(
    category_id: UUID, writer: CategoryWriter = Depends(get_category_writer),
):
    data = await writer.delete(category_id)
    return envelope(True, "Category deleted successfully.", data)
