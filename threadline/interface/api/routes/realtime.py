"""Real-time comment stream over WebSocket.

Protocol (JSON text frames):

    server -> {"type": "connected", "connection_id": ..., "user_id": ...}
    client -> {"action": "join" | "leave", "thread_id": "<comment id>"}
    server -> {"type": "thread:joined" | "thread:left", "thread_id": ...}
    server -> {"type": "comment:created" | ..., ...}  (comment events)
    server -> {"type": "error", "detail": ...}        (bad client message)

A connection whose send fails or stalls is dropped and closed by the hub;
messages that arrive on it afterwards are not acknowledged.

Every connection receives all comment events; joining a thread adds the
events for replies to that comment a second time, on the thread room.
"""

from typing import Literal
from uuid import UUID

import logfire
from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import BaseModel, ValidationError

from threadline.adapter.realtime.hub import WebSocketHub
from threadline.domain.service import BroadcastService, JWTService
from threadline.interface.api.dependencies import bearer_token

router = APIRouter(tags=["realtime"])


class SubscriptionMessage(BaseModel):
    """Client request to join or leave a thread room."""

    action: Literal["join", "leave"]
    thread_id: UUID


@router.websocket("/ws")
async def comment_stream(websocket: WebSocket) -> None:
    """Stream comment events to a client.

    Authentication is optional; anonymous clients receive the same events.
    """
    container = websocket.app.state.dishka_container
    hub = await container.get(WebSocketHub)
    broadcast_service = await container.get(BroadcastService)
    jwt_service = await container.get(JWTService)

    token = websocket.cookies.get("auth_token") or bearer_token(
        websocket.headers.get("authorization")
    )
    user_id = jwt_service.get_user_id_from_token(token)

    await websocket.accept()
    connection_id = hub.register(websocket)
    try:
        await websocket.send_json(
            {
                "type": "connected",
                "connection_id": connection_id,
                "user_id": str(user_id) if user_id else None,
            }
        )
        while True:
            raw = await websocket.receive_text()
            try:
                message = SubscriptionMessage.model_validate_json(raw)
            except ValidationError as e:
                logfire.debug(
                    "Invalid WebSocket message", connection_id=connection_id, error=str(e)
                )
                await websocket.send_json(
                    {"type": "error", "detail": "Expected {action, thread_id}"}
                )
                continue

            if not hub.is_connected(connection_id):
                # Dropped by the hub after a failed send; the socket is closing
                logfire.debug(
                    "Ignoring message on dropped WebSocket", connection_id=connection_id
                )
                break

            thread_id = str(message.thread_id)
            if message.action == "join":
                await broadcast_service.join_thread(connection_id, thread_id)
                await websocket.send_json({"type": "thread:joined", "thread_id": thread_id})
            else:
                await broadcast_service.leave_thread(connection_id, thread_id)
                await websocket.send_json({"type": "thread:left", "thread_id": thread_id})
    except WebSocketDisconnect:
        pass
    finally:
        hub.unregister(connection_id)
