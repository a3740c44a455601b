"""In-process WebSocket hub.

Tracks live connections and room membership for a single API process.
Sends go to the connections present when a publish starts. Each send is
bounded by its own timeout; a connection whose send fails or times out is
dropped and closed, the others still receive the message.
"""

import asyncio
from typing import Any
from uuid import uuid4

import logfire
from fastapi import WebSocket, status

from threadline.domain.service.broadcast_service import Broadcaster


class WebSocketHub(Broadcaster):
    """Connection registry and room fan-out over WebSockets."""

    def __init__(self, send_timeout_seconds: float = 0.5) -> None:
        self.send_timeout_seconds = send_timeout_seconds
        self._connections: dict[str, WebSocket] = {}
        self._rooms: dict[str, set[str]] = {}
        self._memberships: dict[str, set[str]] = {}

    @property
    def connection_count(self) -> int:
        return len(self._connections)

    def is_connected(self, connection_id: str) -> bool:
        """Whether the hub still tracks this connection."""
        return connection_id in self._connections

    def room_members(self, room: str) -> frozenset[str]:
        """Connection IDs currently in a room."""
        return frozenset(self._rooms.get(room, ()))

    def register(self, websocket: WebSocket) -> str:
        """Track an accepted WebSocket and return its connection ID."""
        connection_id = uuid4().hex
        self._connections[connection_id] = websocket
        self._memberships[connection_id] = set()
        logfire.info("WebSocket connected", connection_id=connection_id)
        return connection_id

    def unregister(self, connection_id: str) -> None:
        """Forget a connection and every room it joined."""
        if self._connections.pop(connection_id, None) is None:
            return
        for room in self._memberships.pop(connection_id, set()):
            self._discard_member(room, connection_id)
        logfire.info("WebSocket disconnected", connection_id=connection_id)

    async def join_room(self, connection_id: str, room: str) -> None:
        if connection_id not in self._connections:
            return
        self._rooms.setdefault(room, set()).add(connection_id)
        self._memberships[connection_id].add(room)

    async def leave_room(self, connection_id: str, room: str) -> None:
        memberships = self._memberships.get(connection_id)
        if memberships is not None:
            memberships.discard(room)
        self._discard_member(room, connection_id)

    async def publish_global(self, message: dict[str, Any]) -> None:
        await self._send_many(list(self._connections), message)

    async def publish_to_room(self, room: str, message: dict[str, Any]) -> None:
        await self._send_many(list(self._rooms.get(room, ())), message)

    def _discard_member(self, room: str, connection_id: str) -> None:
        members = self._rooms.get(room)
        if members is None:
            return
        members.discard(connection_id)
        if not members:
            del self._rooms[room]

    async def _send_many(self, connection_ids: list[str], message: dict[str, Any]) -> None:
        targets = [
            (connection_id, self._connections[connection_id])
            for connection_id in connection_ids
            if connection_id in self._connections
        ]
        if not targets:
            return

        results = await asyncio.gather(
            *(
                asyncio.wait_for(websocket.send_json(message), self.send_timeout_seconds)
                for _, websocket in targets
            ),
            return_exceptions=True,
        )
        dropped = []
        for (connection_id, websocket), result in zip(targets, results):
            if isinstance(result, Exception):
                logfire.warn(
                    "Dropping WebSocket after failed send",
                    connection_id=connection_id,
                    error=repr(result),
                )
                self.unregister(connection_id)
                dropped.append((connection_id, websocket))

        if dropped:
            await asyncio.gather(
                *(self._close(connection_id, websocket) for connection_id, websocket in dropped)
            )

    async def _close(self, connection_id: str, websocket: WebSocket) -> None:
        try:
            await asyncio.wait_for(
                websocket.close(code=status.WS_1011_INTERNAL_ERROR),
                self.send_timeout_seconds,
            )
        except Exception as e:
            logfire.debug(
                "WebSocket close after failed send did not complete",
                connection_id=connection_id,
                error=repr(e),
            )
