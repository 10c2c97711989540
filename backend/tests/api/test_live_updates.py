"""Live Updates — end-to-end WebSocket change feed through the real app.

Tests:
    - the first frame is the hello frame with an observer id
    - a write made over HTTP reaches every connected client as a change frame
    - a closed socket is unregistered
    - text and binary frames from the client are ignored

Design Decisions:
    - Starlette TestClient (sync) runs the lifespan, so the real
      ChangeBroadcaster and ConnectionLifecycle are used; the Razorpay route is
      the write because it needs no database
"""

import time

import pytest
from fastapi.testclient import TestClient

from storefront.main import app


def wait_for_observers(count: int, timeout: float = 2.0) -> None:
    deadline = time.monotonic() + timeout
    while app.state.broadcaster.observer_count != count:
        if time.monotonic() > deadline:
            raise AssertionError(f"expected {count} observers")
        time.sleep(0.01)


@pytest.fixture
def live_client():
    app.dependency_overrides.clear()
    with TestClient(app) as tc:
        yield tc


def test_hello_frame(live_client):
    with live_client.websocket_connect("/ws/changes") as ws:
        hello = ws.receive_json()
        assert hello["type"] == "connected"
        assert hello["observer_id"]


def test_http_write_reaches_every_client(live_client):
    with live_client.websocket_connect("/ws/changes") as first, \
            live_client.websocket_connect("/ws/changes") as second:
        ids = {first.receive_json()["observer_id"], second.receive_json()["observer_id"]}
        assert len(ids) == 2
        wait_for_observers(2)

        res = live_client.post("/api/v1/payment/razorpay")
        assert res.status_code == 200

        for ws in (first, second):
            frame = ws.receive_json()
            assert frame["type"] == "change"
            assert frame["entity"] == "payment"
            assert frame["action"] == "created"
            assert frame["data"] == {"provider": "razorpay", "status": "initiated"}


def test_closed_socket_is_unregistered(live_client):
    with live_client.websocket_connect("/ws/changes") as ws:
        ws.receive_json()
        wait_for_observers(1)
    wait_for_observers(0)


def test_client_frames_are_ignored(live_client):
    with live_client.websocket_connect("/ws/changes") as ws:
        ws.receive_json()
        wait_for_observers(1)

        ws.send_bytes(b"ping")
        ws.send_text("ping")
        res = live_client.post("/api/v1/payment/razorpay")
        assert res.status_code == 200

        frame = ws.receive_json()
        assert frame["type"] == "change"
        assert frame["entity"] == "payment"
        assert app.state.broadcaster.observer_count == 1
