"""Live Updates — WebSocket change feed at /ws/changes.

Invariants:
    - First frame is {"type": "connected", "observer_id"}; change frames follow
    - Client frames (text or binary) are read and ignored; they only keep the
      receive side draining
    - However the socket ends (client close, transport error, cancellation),
      the observer is disconnected exactly once
"""

import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from storefront.services.connection_lifecycle import ConnectionLifecycle

logger = logging.getLogger(__name__)
router = APIRouter(tags=["live-updates"])


@router.websocket("/ws/changes")
async def change_feed(websocket: WebSocket):
    lifecycle: ConnectionLifecycle = websocket.app.state.lifecycle
    observer = await lifecycle.connect(websocket)
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
    except WebSocketDisconnect:
        pass
    finally:
        lifecycle.disconnect(observer)
