"""Order Routes.

Invariants:
    - Lists are newest first
    - PUT changes order_status and tracking_url only
"""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.dependencies import get_order_writer
from storefront.api.routes.record_queries import list_records, read_record
from storefront.core.errors import envelope
from storefront.infrastructure.database import get_db
from storefront.models.order import Order
from storefront.schemas.order import OrderCreate, OrderRead, OrderUpdate
from storefront.services.commerce_writers import OrderWriter

router = APIRouter(prefix="/api/v1/orders", tags=["orders"])


@router.get("")
async def list_orders(db: AsyncSession = Depends(get_db)):
    data = await list_records(db, Order, OrderRead, newest_first=True)
    return envelope(True, "Orders retrieved successfully.", data)


@router.get("/by-user/{user_id}")
async def list_user_orders(user_id: str, db: AsyncSession = Depends(get_db)):
    data = await list_records(
        db, Order, OrderRead, Order.user_id == user_id, newest_first=True,
    )
    return envelope(True, "Orders retrieved successfully.", data)


@router.get("/{order_id}")
async def get_order(order_id: UUID, db: AsyncSession = Depends(get_db)):
    data = await read_record(db, Order, OrderRead, order_id, "Order")
    return envelope(True, "Order retrieved successfully.", data)


@router.post("")
async def create_order(body: OrderCreate, writer: OrderWriter = Depends(get_order_writer)):
    data = await writer.create(body.to_fields())
    return envelope(True, "Order created successfully.", data)


@router.put("/{order_id}")
async def update_order(
    order_id: UUID, body: OrderUpdate, writer: OrderWriter = Depends(get_order_writer),
):
    data = await writer.update(order_id, body.changes())
    return envelope(True, "Order updated successfully.", data)


@router.delete("/{order_id}")
async def delete_order(order_id: UUID, writer: OrderWriter = Depends(get_order_writer)):
    data = await writer.delete(order_id)
    return envelope(True, "Order deleted successfully.", data)
