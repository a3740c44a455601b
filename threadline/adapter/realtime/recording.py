"""Broadcaster that records what would have been sent."""

from typing import Any, Optional

from threadline.domain.service.broadcast_service import Broadcaster


class RecordingBroadcaster(Broadcaster):
    """Keeps every published message with the room it targeted.

    Global sends are recorded with room ``None``.
    """

    def __init__(self) -> None:
        self.published: list[tuple[Optional[str], dict[str, Any]]] = []
        self.rooms: dict[str, set[str]] = {}

    async def publish_global(self, message: dict[str, Any]) -> None:
        self.published.append((None, message))

    async def publish_to_room(self, room: str, message: dict[str, Any]) -> None:
        self.published.append((room, message))

    async def join_room(self, connection_id: str, room: str) -> None:
        self.rooms.setdefault(room, set()).add(connection_id)

    async def leave_room(self, connection_id: str, room: str) -> None:
        self.rooms.get(room, set()).discard(connection_id)

    def messages(self, room: Optional[str] = None) -> list[dict[str, Any]]:
        """Messages sent to one target (``None`` for global sends)."""
        return [message for target, message in self.published if target == room]

    def clear(self) -> None:
        self.published.clear()
