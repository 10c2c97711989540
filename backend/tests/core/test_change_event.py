"""Change Event — verifies the immutable event and its wire envelope.

Tests:
    - to_wire() produces the single generic envelope for every entity/action
    - deleted events carry only the id
    - events are frozen and carry unique ids
"""

import dataclasses
from uuid import uuid4

import pytest

from storefront.core import change_event
from storefront.core.change_event import ChangeEvent, connected_message
from storefront.core.domain_types import ChangeAction, EntityType, ObserverId


def test_wire_envelope_shape():
    event = change_event.created(EntityType.BRAND, {"id": "b1", "name": "Acme"})
    wire = event.to_wire()
    assert wire["type"] == "change"
    assert wire["entity"] == "brand"
    assert wire["action"] == "created"
    assert wire["data"] == {"id": "b1", "name": "Acme"}
    assert wire["event_id"] == event.event_id
    assert wire["occurred_at"].endswith("+00:00")


def test_updated_event_carries_full_record():
    record = {"id": "p1", "name": "Shirt", "price": 10.0}
    event = change_event.updated(EntityType.PRODUCT, record)
    assert event.action is ChangeAction.UPDATED
    assert event.payload == record


def test_deleted_event_carries_only_id():
    record_id = uuid4()
    event = change_event.deleted(EntityType.VARIANT, record_id)
    assert event.action is ChangeAction.DELETED
    assert event.to_wire()["data"] == {"id": str(record_id)}


def test_events_are_frozen():
    event = ChangeEvent(EntityType.POSTER, ChangeAction.CREATED, {"id": "x"})
    with pytest.raises(dataclasses.FrozenInstanceError):
        event.action = ChangeAction.DELETED


def test_event_ids_are_unique():
    a = change_event.created(EntityType.COUPON, {})
    b = change_event.created(EntityType.COUPON, {})
    assert a.event_id != b.event_id


def test_connected_message():
    assert connected_message(ObserverId("abc")) == {
        "type": "connected", "observer_id": "abc",
    }


def test_entity_types_cover_every_resource():
    assert {e.value for e in EntityType} == {
        "category", "sub_category", "brand", "variant", "variant_type",
        "product", "coupon", "poster", "order", "payment", "notification",
    }
