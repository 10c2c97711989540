"""Change Event — the immutable fact that one record mutation completed.

Invariants:
    - ChangeEvent is frozen; payload is never mutated after construction
    - Deleted events carry only {"id": ...}; created/updated carry the full record
    - to_wire() is the single wire envelope for every entity and action:
      {"type": "change", "event_id", "entity", "action", "data", "occurred_at"}

Design Decisions:
    - One generic envelope instead of per-action event names (product_created,
      brandUpdate, ...): clients switch on (entity, action) only
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from storefront.core.domain_types import ChangeAction, EntityType, ObserverId

CHANGE_MESSAGE_TYPE = "change"
CONNECTED_MESSAGE_TYPE = "connected"


@dataclass(frozen=True)
class ChangeEvent:
    """A notification describing one completed mutation."""
    entity_type: EntityType
    action: ChangeAction
    payload: Any
    event_id: str = field(default_factory=lambda: uuid4().hex)
    occurred_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc),
    )

    def to_wire(self) -> dict:
        """Serialize to the JSON message pushed to every observer."""
        return {
            "type": CHANGE_MESSAGE_TYPE,
            "event_id": self.event_id,
            "entity": self.entity_type.value,
            "action": self.action.value,
            "data": self.payload,
            "occurred_at": self.occurred_at.isoformat(),
        }


def created(entity_type: EntityType, record: dict) -> ChangeEvent:
    return ChangeEvent(entity_type, ChangeAction.CREATED, record)


def updated(entity_type: EntityType, record: dict) -> ChangeEvent:
    return ChangeEvent(entity_type, ChangeAction.UPDATED, record)


def deleted(entity_type: EntityType, record_id: Any) -> ChangeEvent:
    """Deleted events carry the id only — the record no longer exists."""
    return ChangeEvent(entity_type, ChangeAction.DELETED, {"id": str(record_id)})


def connected_message(observer_id: ObserverId) -> dict:
    """Hello frame sent to an observer right after its handshake."""
    return {"type": CONNECTED_MESSAGE_TYPE, "observer_id": observer_id}
