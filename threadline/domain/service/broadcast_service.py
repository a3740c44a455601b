"""Broadcast domain service."""

import asyncio
from typing import Any

import logfire

from threadline.config import RealtimeSettings
from threadline.domain.model.event import CommentEvent, event_to_message

from .base import Service


class Broadcaster:
    """Room-scoped publish/subscribe transport over persistent connections."""

    async def publish_global(self, message: dict[str, Any]) -> None:
        """Send a message to every connected client."""
        raise NotImplementedError

    async def publish_to_room(self, room: str, message: dict[str, Any]) -> None:
        """Send a message to the clients that joined ``room``."""
        raise NotImplementedError

    async def join_room(self, connection_id: str, room: str) -> None:
        """Add a connection to a room."""
        raise NotImplementedError

    async def leave_room(self, connection_id: str, room: str) -> None:
        """Remove a connection from a room."""
        raise NotImplementedError


class BroadcastService(Service):
    """Fire-and-forget fan-out of comment events.

    An event goes to every connection and, when it belongs to a reply
    thread, additionally to that thread's room. Delivery is at most once:
    whoever is connected at publish time receives it.
    """

    def __init__(
        self, broadcaster: Broadcaster, realtime_settings: RealtimeSettings
    ) -> None:
        """Initialize broadcast service.

        Args:
            broadcaster: Transport the events go out on
            realtime_settings: Room naming and publish timeout
        """
        self.broadcaster = broadcaster
        self.room_prefix = realtime_settings.thread_room_prefix
        self.timeout_seconds = realtime_settings.publish_timeout_seconds

    def thread_room(self, thread_id: str) -> str:
        """Room name for the replies of one comment."""
        return f"{self.room_prefix}{thread_id}"

    async def join_thread(self, connection_id: str, thread_id: str) -> str:
        """Subscribe a connection to a thread; returns the room name."""
        room = self.thread_room(thread_id)
        await self.broadcaster.join_room(connection_id, room)
        logfire.debug("Connection joined thread", connection_id=connection_id, room=room)
        return room

    async def leave_thread(self, connection_id: str, thread_id: str) -> str:
        """Unsubscribe a connection from a thread; returns the room name."""
        room = self.thread_room(thread_id)
        await self.broadcaster.leave_room(connection_id, room)
        logfire.debug("Connection left thread", connection_id=connection_id, room=room)
        return room

    async def publish(self, event: CommentEvent) -> None:
        """Publish an event. Never raises.

        Args:
            event: Event describing a committed mutation
        """
        with logfire.span(
            "broadcast_service.publish",
            event_type=event.type,
            comment_id=str(event.comment_id),
        ):
            try:
                await asyncio.wait_for(self._fan_out(event), self.timeout_seconds)
            except Exception as e:
                logfire.error(
                    "Broadcast failed",
                    event_type=event.type,
                    comment_id=str(event.comment_id),
                    error=str(e),
                )

    async def _fan_out(self, event: CommentEvent) -> None:
        message = event_to_message(event)
        await self.broadcaster.publish_global(message)
        if event.parent_id is not None:
            await self.broadcaster.publish_to_room(
                self.thread_room(str(event.parent_id)), message
            )
