"""Change Broadcaster — verifies fan-out, ordering and observer isolation.

Tests:
    - every observer registered at publish time gets exactly one copy
    - late registrations never see earlier events; unregistered observers see nothing
    - unregister is idempotent
    - publish with zero observers neither raises nor blocks
    - per-observer order matches publish order
    - a full queue drops the event for that observer only
    - a failing observer is unregistered without affecting the others
"""

import asyncio

import pytest

from storefront.core import change_event
from storefront.core.domain_types import EntityType, ObserverId
from storefront.services.change_broadcaster import ChangeBroadcaster


class FakeObserver:
    def __init__(self, observer_id: str):
        self.observer_id = ObserverId(observer_id)
        self.received: list[dict] = []

    async def send(self, message: dict) -> None:
        self.received.append(message)


class BrokenObserver(FakeObserver):
    async def send(self, message: dict) -> None:
        raise ConnectionError("socket closed")


class StalledObserver(FakeObserver):
    """Never finishes a send until released."""

    def __init__(self, observer_id: str):
        super().__init__(observer_id)
        self.release = asyncio.Event()

    async def send(self, message: dict) -> None:
        await self.release.wait()
        self.received.append(message)


def brand_event(name: str = "Acme"):
    return change_event.created(EntityType.BRAND, {"id": name, "name": name})


@pytest.fixture
async def broadcaster():
    hub = ChangeBroadcaster(queue_size=8)
    yield hub
    await hub.close()


async def test_each_registered_observer_receives_exactly_once(broadcaster, settle):
    a, b = FakeObserver("a"), FakeObserver("b")
    broadcaster.register(a)
    broadcaster.register(b)

    event = brand_event()
    assert broadcaster.publish(event) == 2
    await settle(lambda: a.received and b.received)
    await asyncio.sleep(0.01)

    assert a.received == [event.to_wire()]
    assert b.received == [event.to_wire()]


async def test_late_registration_gets_no_replay(broadcaster, settle):
    early, late = FakeObserver("early"), FakeObserver("late")
    broadcaster.register(early)
    first = brand_event("first")
    broadcaster.publish(first)

    broadcaster.register(late)
    second = brand_event("second")
    broadcaster.publish(second)
    await settle(lambda: len(early.received) == 2 and late.received)

    assert late.received == [second.to_wire()]


async def test_unregistered_observer_receives_nothing(broadcaster):
    gone = FakeObserver("gone")
    broadcaster.register(gone)
    broadcaster.unregister(gone.observer_id)

    assert broadcaster.publish(brand_event()) == 0
    await asyncio.sleep(0.01)
    assert gone.received == []


async def test_unregister_is_idempotent(broadcaster):
    observer = FakeObserver("x")
    broadcaster.register(observer)
    assert broadcaster.unregister(observer.observer_id) is True
    assert broadcaster.unregister(observer.observer_id) is False
    assert broadcaster.unregister(ObserverId("never-registered")) is False
    assert broadcaster.observer_count == 0


async def test_register_twice_returns_same_handle(broadcaster):
    observer = FakeObserver("x")
    assert broadcaster.register(observer) is broadcaster.register(observer)
    assert broadcaster.observer_count == 1


async def test_publish_with_no_observers():
    hub = ChangeBroadcaster()
    assert hub.publish(brand_event()) == 0
    assert hub.published_count == 1


async def test_events_arrive_in_publish_order(broadcaster, settle):
    observers = [FakeObserver(str(i)) for i in range(3)]
    for observer in observers:
        broadcaster.register(observer)

    events = [brand_event(f"b{i}") for i in range(5)]
    for event in events:
        broadcaster.publish(event)
    await settle(lambda: all(len(o.received) == 5 for o in observers))

    expected = [e.event_id for e in events]
    for observer in observers:
        assert [m["event_id"] for m in observer.received] == expected


async def test_full_queue_drops_for_that_observer_only(settle):
    hub = ChangeBroadcaster(queue_size=1)
    slow, fast = StalledObserver("slow"), FakeObserver("fast")
    slow_handle = hub.register(slow)
    hub.register(fast)

    first = brand_event("first")
    hub.publish(first)
    # let the slow observer take `first` and stall inside send()
    await settle(lambda: slow_handle.queue.empty() and fast.received)

    hub.publish(brand_event("second"))
    await settle(lambda: len(fast.received) == 2)
    assert hub.publish(brand_event("third")) == 1
    assert slow_handle.dropped == 1
    await settle(lambda: len(fast.received) == 3)

    slow.release.set()
    await settle(lambda: len(slow.received) == 2)
    assert [m["data"]["name"] for m in slow.received] == ["first", "second"]
    await hub.close()


async def test_failing_observer_is_removed(broadcaster, settle):
    broken, healthy = BrokenObserver("broken"), FakeObserver("healthy")
    broadcaster.register(broken)
    broadcaster.register(healthy)

    broadcaster.publish(brand_event("one"))
    await settle(lambda: not broadcaster.is_registered(broken.observer_id))

    broadcaster.publish(brand_event("two"))
    await settle(lambda: len(healthy.received) == 2)
    assert broadcaster.observer_count == 1


async def test_publish_never_raises():
    class UnserializableEvent:
        def to_wire(self):
            raise TypeError("not serializable")

    hub = ChangeBroadcaster()
    assert hub.publish(UnserializableEvent()) == 0


async def test_close_unregisters_everyone():
    hub = ChangeBroadcaster()
    for i in range(3):
        hub.register(FakeObserver(str(i)))
    await hub.close()
    assert hub.observer_count == 0


def test_queue_size_must_be_positive():
    with pytest.raises(ValueError):
        ChangeBroadcaster(queue_size=0)
