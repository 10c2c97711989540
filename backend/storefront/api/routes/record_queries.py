"""Record Queries — read helpers shared by the entity routers.

Invariants:
    - Reads never publish ChangeEvents
    - Lists default to oldest first unless the caller passes an ordering
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.db.base import Base
from storefront.schemas.base import RecordRead
from storefront.services.write_adapter import get_or_404


async def list_records(
    db: AsyncSession,
    model: type[Base],
    schema: type[RecordRead],
    *criteria,
    newest_first: bool = False,
) -> list[dict]:
    order = model.created_at.desc() if newest_first else model.created_at.asc()
    result = await db.execute(select(model).where(*criteria).order_by(order))
    return [schema.to_payload(record) for record in result.scalars().all()]


async def read_record(
    db: AsyncSession, model: type[Base], schema: type[RecordRead], record_id: UUID, label: str,
) -> dict:
    return schema.to_payload(await get_or_404(db, model, record_id, label))
