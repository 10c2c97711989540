"""Connection Lifecycle — WebSocket observers: handshake, identity, teardown.

Invariants:
    - State machine: CONNECTED -> DISCONNECTED; DISCONNECTED is terminal
    - Each connection gets a fresh opaque observer_id (diagnostics only, no authz)
    - The hello frame is sent before registration, so it always precedes change events
    - disconnect() is idempotent; only the first call unregisters and logs
    - A reconnecting client is a new observer with no backlog
    - The broadcaster alone owns the observer set; this module never keeps its own
    - close_all() sends a close frame (1001 going away) to every open socket on shutdown
"""

import asyncio
import logging
import time
from typing import Callable
from uuid import uuid4

from fastapi import WebSocket

from storefront.core.change_event import connected_message
from storefront.core.domain_types import ConnectionState, ObserverId
from storefront.services.change_broadcaster import ChangeBroadcaster

logger = logging.getLogger(__name__)


def new_observer_id() -> ObserverId:
    return ObserverId(uuid4().hex)


class WebSocketObserver:
    """One connected WebSocket client."""

    def __init__(self, websocket: WebSocket, observer_id: ObserverId):
        self.websocket = websocket
        self.observer_id = observer_id
        self.state = ConnectionState.CONNECTED
        self.connected_at = time.time()
        # Starlette sockets reject concurrent sends
        self._send_lock = asyncio.Lock()

    async def send(self, message: dict) -> None:
        async with self._send_lock:
            await self.websocket.send_json(message)


class ConnectionLifecycle:
    """Registers observers on connect and unregisters them on disconnect."""

    def __init__(
        self,
        broadcaster: ChangeBroadcaster,
        id_factory: Callable[[], ObserverId] = new_observer_id,
    ):
        self._broadcaster = broadcaster
        self._id_factory = id_factory

    async def connect(self, websocket: WebSocket) -> WebSocketObserver:
        """Complete the handshake and start receiving change events."""
        await websocket.accept()
        observer = WebSocketObserver(websocket, self._id_factory())
        await observer.send(connected_message(observer.observer_id))
        self._broadcaster.register(observer)
        logger.info(
            "Client connected",
            extra={
                "observer_id": observer.observer_id,
                "observer_count": self._broadcaster.observer_count,
            },
        )
        return observer

    def disconnect(self, observer: WebSocketObserver) -> bool:
        """Terminal transition. Returns False if already disconnected."""
        if observer.state is ConnectionState.DISCONNECTED:
            return False
        observer.state = ConnectionState.DISCONNECTED
        self._broadcaster.unregister(observer.observer_id)
        logger.info(
            f"Client disconnected after {time.time() - observer.connected_at:.1f}s",
            extra={
                "observer_id": observer.observer_id,
                "observer_count": self._broadcaster.observer_count,
            },
        )
        return True

    async def close_all(self, code: int = 1001) -> int:
        """Disconnect every WebSocket observer and send it a close frame.

        Returns the number of sockets closed. Called on shutdown, before the
        broadcaster stops its delivery tasks.
        """
        closed = 0
        for observer in self._broadcaster.observers():
            if not isinstance(observer, WebSocketObserver):
                continue
            if not self.disconnect(observer):
                continue
            try:
                await observer.websocket.close(code=code)
                closed += 1
            except Exception as e:
                logger.warning(
                    f"Close frame not sent: {e}",
                    extra={"observer_id": observer.observer_id},
                )
        return closed
