"""Schema Base Classes — shared read/update behaviour for every entity schema.

Invariants:
    - RecordRead.to_payload() is the single serialization of a record (JSON-safe)
    - Timestamps are always serialized with a UTC offset
    - PartialUpdate.changes() returns only fields the client sent; an explicit
      null is ignored unless the field is listed in `clearable`
"""

from datetime import datetime, timezone
from typing import Annotated, ClassVar
from uuid import UUID

from pydantic import AfterValidator, BaseModel, ConfigDict


def _assume_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# SQLite hands back naive datetimes; every stored timestamp is UTC
UTCDateTime = Annotated[datetime, AfterValidator(_assume_utc)]


class RecordRead(BaseModel):
    """Common identity/timestamps of every persisted record."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    created_at: UTCDateTime
    updated_at: UTCDateTime

    @classmethod
    def to_payload(cls, record) -> dict:
        return cls.model_validate(record).model_dump(mode="json")


class PartialUpdate(BaseModel):
    """Base for update bodies — partial merge semantics."""

    clearable: ClassVar[frozenset[str]] = frozenset()

    def changes(self) -> dict:
        return {
            key: value
            for key, value in self.model_dump(exclude_unset=True).items()
            if value is not None or key in self.clearable
        }
