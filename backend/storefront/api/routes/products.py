"""Product Routes.

Invariants:
    - GET /products/{id} adds shareable_link = {public_base_url}/product/{id}
    - images are {image: 1..5, url} slots; an update merges by slot
    - variant_ids in an update replaces the offered set
"""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.dependencies import get_product_writer
from storefront.api.routes.record_queries import list_records, read_record
from storefront.config import get_settings
from storefront.core.errors import envelope
from storefront.infrastructure.database import get_db
from storefront.models.product import Product
from storefront.schemas.product import ProductCreate, ProductRead, ProductUpdate
from storefront.services.product_writer import ProductWriter

router = APIRouter(prefix="/api/v1/products", tags=["products"])


def shareable_link(product_id: UUID) -> str:
    return f"{get_settings().public_base_url.rstrip('/')}/product/{product_id}"


@router.get("")
async def list_products(db: AsyncSession = Depends(get_db)):
    data = await list_records(db, Product, ProductRead)
    return envelope(True, "Products retrieved successfully.", data)


@router.get("/{product_id}")
async def get_product(product_id: UUID, db: AsyncSession = Depends(get_db)):
    data = await read_record(db, Product, ProductRead, product_id, "Product")
    data["shareable_link"] = shareable_link(product_id)
    return envelope(True, "Product retrieved successfully.", data)


@router.post("")
async def create_product(
    body: ProductCreate, writer: ProductWriter = Depends(get_product_writer),
):
    data = await writer.create(body.model_dump())
    return envelope(True, "Product created successfully.", data)


@router.put("/{product_id}")
async def update_product(
    product_id: UUID,
    body: ProductUpdate,
    writer: ProductWriter = Depends(get_product_writer),
):
    data = await writer.update(product_id, body.changes())
    return envelope(True, "Product updated successfully.", data)


@router.delete("/{product_id}")
async def delete_product(
    product_id: UUID, writer: ProductWriter = Depends(get_product_writer),
):
    data = await writer.delete(product_id)
    return envelope(True, "Product deleted successfully.", data)
