"""Coupon Routes — CRUD plus the applicability check used at checkout.

Invariants:
    - coupon_code is unique (400 on duplicate)
    - check-coupon always answers 200; success=false carries the reason,
      success=true carries the coupon and the discount for purchase_amount
    - check-coupon is a read: it never publishes
"""

import logging
from datetime import datetime, timezone
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.dependencies import get_coupon_writer
from storefront.api.routes.record_queries import list_records, read_record
from storefront.core.coupon_rules import apply_discount, check_coupon
from storefront.core.errors import envelope
from storefront.infrastructure.database import get_db
from storefront.models.coupon import Coupon
from storefront.models.product import Product
from storefront.schemas.coupon import (
    CouponCheckRequest, CouponCreate, CouponRead, CouponUpdate,
)
from storefront.services.commerce_writers import CouponWriter

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/coupon-codes", tags=["coupons"])


@router.get("")
async def list_coupons(db: AsyncSession = Depends(get_db)):
    data = await list_records(db, Coupon, CouponRead)
    return envelope(True, "Coupons retrieved successfully.", data)


@router.post("/check-coupon")
async def check_coupon_code(body: CouponCheckRequest, db: AsyncSession = Depends(get_db)):
    coupon = (await db.execute(
        select(Coupon).where(Coupon.coupon_code == body.coupon_code),
    )).scalar_one_or_none()
    products = []
    if body.product_ids:
        products = list((await db.execute(
            select(Product).where(Product.id.in_(body.product_ids)),
        )).scalars().all())

    result = check_coupon(
        coupon, products, body.purchase_amount, datetime.now(timezone.utc),
    )
    if not result.applicable:
        return envelope(False, result.message)
    data = {
        "coupon": CouponRead.to_payload(coupon),
        "discount": apply_discount(coupon, body.purchase_amount),
    }
    return envelope(True, result.message, data)


@router.get("/{coupon_id}")
async def get_coupon(coupon_id: UUID, db: AsyncSession = Depends(get_db)):
    data = await read_record(db, Coupon, CouponRead, coupon_id, "Coupon")
    return envelope(True, "Coupon retrieved successfully.", data)


@router.post("")
async def create_coupon(
    body: CouponCreate, writer: CouponWriter = Depends(get_coupon_writer),
):
    data = await writer.create(body.model_dump())
    return envelope(True, "Coupon created successfully.", data)


@router.put("/{coupon_id}")
async def update_coupon(
    coupon_id: UUID,
    body: CouponUpdate,
    writer: CouponWriter = Depends(get_coupon_writer),
):
    data = await writer.update(coupon_id, body.changes())
    return envelope(True, "Coupon updated successfully.", data)


@router.delete("/{coupon_id}")
async def delete_coupon(
    coupon_id: UUID, writer: CouponWriter = Depends(get_coupon_writer),
):
    data = await writer.delete(coupon_id)
    return envelope(True, "Coupon deleted successfully.", data)
