"""Write Adapter — the create/update/delete skeleton every entity writer shares.

Invariants:
    - Exactly one commit per operation; nothing is written when a check fails
    - Checks run before any mutation: uniqueness on create/update,
      referential-integrity on delete (ConflictError, 400)
    - Unknown ids raise NotFoundError (404) before any check
    - Update is a partial merge: only keys present in `changes` are touched
    - SQLAlchemy failures roll back and surface as StorefrontError (never raw)
    - The ChangeEvent is published only after a successful commit, and a publish
      failure never propagates: the caller's response is already decided

Design Decisions:
    - Template methods (_check_create/_check_update/_check_delete/_build/_apply)
      instead of per-entity copies of the same handler body
    - Broadcaster passed in by the caller, so tests substitute an in-memory fake
"""

import logging
from enum import Enum
from typing import Any, ClassVar, Generic, TypeVar
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core import change_event
from storefront.core.change_event import ChangeEvent
from storefront.core.domain_types import EntityType
from storefront.core.errors import ConflictError, NotFoundError
from storefront.db.base import Base
from storefront.infrastructure.database import translate_db_error
from storefront.schemas.base import RecordRead
from storefront.services.change_broadcaster import ChangeBroadcaster

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


def column_values(fields: dict) -> dict:
    """Enum members are stored as their plain string value."""
    return {
        key: value.value if isinstance(value, Enum) else value
        for key, value in fields.items()
    }


async def get_or_404(db: AsyncSession, model: type[ModelT], record_id: UUID, label: str) -> ModelT:
    record = await db.get(model, record_id)
    if record is None:
        raise NotFoundError(label, record_id)
    return record


async def count_where(db: AsyncSession, model: type[Base], *criteria) -> int:
    result = await db.execute(
        select(func.count()).select_from(model).where(*criteria),
    )
    return result.scalar_one()


class WriteAdapter(Generic[ModelT]):
    """Validate, mutate once, publish. Subclasses declare model and hooks."""

    model: ClassVar[type[Base]]
    entity_type: ClassVar[EntityType]
    read_schema: ClassVar[type[RecordRead]]
    label: ClassVar[str]

    def __init__(self, db: AsyncSession, broadcaster: ChangeBroadcaster):
        self.db = db
        self.broadcaster = broadcaster

    # -- operations ------------------------------------------------------------

    async def create(self, fields: dict) -> dict:
        await self._check_create(fields)
        record = self._build(fields)
        self.db.add(record)
        await self._commit("create")
        payload = self.serialize(record)
        self._announce(change_event.created(self.entity_type, payload))
        return payload

    async def update(self, record_id: UUID, changes: dict) -> dict:
        record = await self.get(record_id)
        await self._check_update(record, changes)
        self._apply(record, changes)
        await self._commit("update")
        payload = self.serialize(record)
        self._announce(change_event.updated(self.entity_type, payload))
        return payload

    async def delete(self, record_id: UUID) -> dict:
        record = await self.get(record_id)
        await self._check_delete(record)
        await self.db.delete(record)
        await self._commit("delete")
        self._announce(change_event.deleted(self.entity_type, record_id))
        return {"id": str(record_id)}

    async def get(self, record_id: UUID) -> ModelT:
        return await get_or_404(self.db, self.model, record_id, self.label)

    def serialize(self, record: ModelT) -> dict:
        return self.read_schema.to_payload(record)

    # -- hooks -----------------------------------------------------------------

    async def _check_create(self, fields: dict) -> None:
        pass

    async def _check_update(self, record: ModelT, changes: dict) -> None:
        pass

    async def _check_delete(self, record: ModelT) -> None:
        pass

    def _build(self, fields: dict) -> ModelT:
        # None means "not given": column defaults apply
        values = {k: v for k, v in column_values(fields).items() if v is not None}
        return self.model(**values)

    def _apply(self, record: ModelT, changes: dict) -> None:
        for key, value in column_values(changes).items():
            setattr(record, key, value)

    # -- helpers ---------------------------------------------------------------

    async def _refuse_if_referenced(self, dependents: list[tuple[type[Base], Any, str]]) -> None:
        """Raise ConflictError for the first (model, criterion, message) with rows."""
        for model, criterion, message in dependents:
            if await count_where(self.db, model, criterion):
                raise ConflictError(message)

    async def _commit(self, operation: str) -> None:
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"{self.label} {operation} failed: {e}",
                extra={"entity_type": self.entity_type.value},
            )
            raise translate_db_error(e, operation)

    def _announce(self, event: ChangeEvent) -> None:
        try:
            self.broadcaster.publish(event)
        except Exception as e:
            logger.error(
                f"Publish failed after {event.action.value} {self.label}: {e}",
                extra={
                    "entity_type": event.entity_type.value,
                    "action": event.action.value,
                },
                exc_info=True,
            )
