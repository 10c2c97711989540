"""Change Broadcaster — process-wide fan-out of ChangeEvents to connected observers.

Invariants:
    - publish() never raises and never awaits an observer; it only enqueues
    - Every observer sees events in global publish() call order (one FIFO queue each)
    - An event reaches exactly the observers registered when publish() was called:
      no replay for late registrations, no buffering for unregistered ones
    - register/unregister/publish contain no await, so each runs atomically on
      the event loop; the registry is never observed half-updated
    - unregister() is idempotent
    - A full observer queue drops the event for that observer only (at-most-once)
    - A failing send unregisters that observer; other observers are unaffected

Design Decisions:
    - One delivery task per observer: a slow socket only delays its own queue
    - Constructed once per app (lifespan) and injected; never a module global
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol

from storefront.core.change_event import ChangeEvent
from storefront.core.domain_types import ObserverId

logger = logging.getLogger(__name__)


class Observer(Protocol):
    """Anything that can receive change messages."""
    observer_id: ObserverId

    async def send(self, message: dict) -> None: ...


@dataclass
class ObserverHandle:
    """Registry entry: the observer, its pending messages and its delivery task."""
    observer: Observer
    queue: asyncio.Queue
    task: asyncio.Task | None = None
    delivered: int = 0
    dropped: int = 0


class ChangeBroadcaster:
    """Publish/subscribe hub owning the set of registered observers."""

    def __init__(self, queue_size: int = 256):
        if queue_size < 1:
            raise ValueError("queue_size must be >= 1")
        self._queue_size = queue_size
        self._handles: dict[ObserverId, ObserverHandle] = {}
        self._published = 0

    # -- registry --------------------------------------------------------------

    def register(self, observer: Observer) -> ObserverHandle:
        """Add an observer; it receives every event published after this returns."""
        existing = self._handles.get(observer.observer_id)
        if existing is not None:
            return existing
        handle = ObserverHandle(
            observer=observer, queue=asyncio.Queue(maxsize=self._queue_size),
        )
        self._handles[observer.observer_id] = handle
        handle.task = asyncio.get_running_loop().create_task(
            self._deliver(handle), name=f"change-feed:{observer.observer_id}",
        )
        logger.debug(
            "Observer registered", extra={"observer_id": observer.observer_id},
        )
        return handle

    def unregister(self, observer_id: ObserverId) -> bool:
        """Remove an observer. Returns False if it was not registered."""
        handle = self._handles.pop(observer_id, None)
        if handle is None:
            return False
        task = handle.task
        if task is not None and not task.done() and task is not asyncio.current_task():
            task.cancel()
        logger.debug(
            "Observer unregistered",
            extra={"observer_id": observer_id},
        )
        return True

    def is_registered(self, observer_id: ObserverId) -> bool:
        return observer_id in self._handles

    def observers(self) -> list[Observer]:
        """Snapshot of the currently registered observers."""
        return [h.observer for h in self._handles.values()]

    @property
    def observer_count(self) -> int:
        return len(self._handles)

    @property
    def published_count(self) -> int:
        return self._published

    # -- fan-out ---------------------------------------------------------------

    def publish(self, event: ChangeEvent) -> int:
        """Queue `event` for every registered observer.

        Returns the number of observers the event was queued for. Never raises:
        the write that produced the event has already committed.
        """
        try:
            message = event.to_wire()
            queued = 0
            for handle in list(self._handles.values()):
                try:
                    handle.queue.put_nowait(message)
                    queued += 1
                except asyncio.QueueFull:
                    handle.dropped += 1
                    logger.warning(
                        "Observer queue full, event dropped",
                        extra={
                            "observer_id": handle.observer.observer_id,
                            "event_id": event.event_id,
                        },
                    )
            self._published += 1
            logger.debug(
                f"Published change to {queued} observer(s)",
                extra={
                    "entity_type": event.entity_type.value,
                    "action": event.action.value,
                    "event_id": event.event_id,
                },
            )
            return queued
        except Exception as e:
            logger.error(f"Publish failed: {e}", exc_info=True)
            return 0

    async def _deliver(self, handle: ObserverHandle) -> None:
        """Drain one observer's queue in order until it is unregistered or breaks."""
        observer_id = handle.observer.observer_id
        while True:
            message = await handle.queue.get()
            try:
                await handle.observer.send(message)
                handle.delivered += 1
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.warning(
                    f"Delivery failed, dropping observer: {e}",
                    extra={"observer_id": observer_id},
                )
                self.unregister(observer_id)
                return

    async def close(self) -> None:
        """Unregister every observer and wait for delivery tasks to stop."""
        tasks = [h.task for h in self._handles.values() if h.task is not None]
        for observer_id in list(self._handles):
            self.unregister(observer_id)
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
