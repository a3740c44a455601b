"""End-to-end tests for the WebSocket stream and health check."""

from uuid import uuid4

import pytest
from starlette.websockets import WebSocketDisconnect

from threadline.adapter.realtime.hub import WebSocketHub
from threadline.domain.repository import UserRepository
from tests.conftest import make_token, make_user
from tests.harness import create_client_fixture

# API client with the real in-process WebSocket hub
client = create_client_fixture(unmock={"realtime"})


def seed_user(client) -> tuple[str, dict[str, str]]:
    container = client.app.state.dishka_container
    user_repo = client.portal.call(container.get, UserRepository)
    user = client.portal.call(user_repo.save, make_user())
    token = make_token(user)
    return str(user.id), {"Authorization": f"Bearer {token}"}


class TestCommentStream:
    """WebSocket protocol and event delivery."""

    def test_connected_greeting_identifies_user(self, client):
        """Authenticated sockets learn their user ID."""
        # Arrange
        user_id, headers = seed_user(client)

        # Act
        with client.websocket_connect("/ws", headers=headers) as ws:
            greeting = ws.receive_json()

        # Assert
        assert greeting["type"] == "connected"
        assert greeting["user_id"] == user_id
        assert greeting["connection_id"]

    def test_anonymous_connection(self, client):
        """Anonymous sockets are welcome."""
        # Act
        with client.websocket_connect("/ws") as ws:
            greeting = ws.receive_json()

        # Assert
        assert greeting["type"] == "connected"
        assert greeting["user_id"] is None

    def test_events_reach_global_and_thread_subscribers(self, client):
        """Replies arrive once globally and once more on the joined thread."""
        # Arrange
        _, headers = seed_user(client)

        with client.websocket_connect("/ws") as ws:
            ws.receive_json()  # connected

            parent = client.post(
                "/comments", json={"content": "Parent"}, headers=headers
            ).json()["comment"]
            parent_created = ws.receive_json()

            ws.send_json({"action": "join", "thread_id": parent["id"]})
            joined = ws.receive_json()

            # Act
            reply = client.post(
                "/comments",
                json={"content": "Reply", "parent_id": parent["id"]},
                headers=headers,
            ).json()["comment"]
            global_event = ws.receive_json()
            room_event = ws.receive_json()

        # Assert
        assert parent_created["type"] == "comment:created"
        assert parent_created["comment"]["id"] == parent["id"]
        assert joined == {"type": "thread:joined", "thread_id": parent["id"]}
        assert global_event["type"] == "comment:created"
        assert global_event["comment"]["id"] == reply["id"]
        assert room_event == global_event

    def test_leave_thread(self, client):
        """After leaving, reply events only arrive on the global channel."""
        # Arrange
        _, headers = seed_user(client)
        parent = client.post(
            "/comments", json={"content": "Parent"}, headers=headers
        ).json()["comment"]
        reply = client.post(
            "/comments",
            json={"content": "Reply", "parent_id": parent["id"]},
            headers=headers,
        ).json()["comment"]

        with client.websocket_connect("/ws") as ws:
            ws.receive_json()  # connected
            ws.send_json({"action": "join", "thread_id": parent["id"]})
            ws.receive_json()  # thread:joined
            ws.send_json({"action": "leave", "thread_id": parent["id"]})
            left = ws.receive_json()

            # Act
            client.delete(f"/comments/{reply['id']}", headers=headers)
            deleted = ws.receive_json()

            # Next frame is the error reply, not a room copy
            ws.send_text("ping")
            follow_up = ws.receive_json()

        # Assert
        assert left == {"type": "thread:left", "thread_id": parent["id"]}
        assert deleted == {
            "type": "comment:deleted",
            "id": reply["id"],
            "parent_id": parent["id"],
        }
        assert follow_up["type"] == "error"

    def test_invalid_subscription_message(self, client):
        """Malformed client messages get an error frame, not a disconnect."""
        # Act
        with client.websocket_connect("/ws") as ws:
            ws.receive_json()  # connected
            ws.send_json({"action": "join", "thread_id": "not-a-uuid"})
            error = ws.receive_json()
            ws.send_json({"action": "dance", "thread_id": "x"})
            second = ws.receive_json()

        # Assert
        assert error["type"] == "error"
        assert second["type"] == "error"

    def test_dropped_connection_is_not_acknowledged(self, client):
        """A socket the hub dropped gets closed instead of a thread:joined."""
        # Arrange
        hub = client.portal.call(client.app.state.dishka_container.get, WebSocketHub)

        with client.websocket_connect("/ws") as ws:
            connection_id = ws.receive_json()["connection_id"]
            client.portal.call(hub.unregister, connection_id)

            # Act
            ws.send_json({"action": "join", "thread_id": str(uuid4())})

            # Assert
            with pytest.raises(WebSocketDisconnect):
                ws.receive_json()

        assert hub.connection_count == 0


class TestHealth:
    """Health endpoint."""

    def test_health_reports_connections(self, client):
        """Open sockets are counted."""
        # Act
        idle = client.get("/health").json()
        with client.websocket_connect("/ws") as ws:
            ws.receive_json()
            busy = client.get("/health").json()

        # Assert
        assert idle["status"] == "healthy"
        assert idle["connections"] == 0
        assert busy["connections"] == 1
