"""Client-side reconciliation of comment events.

A subscriber keeps one ordered page of comments in step with the server's
event stream. There is no replay: after a reconnect or a thread switch the
caller fetches the current page again and hands it to ``resync``.
"""

from typing import Any, Optional
from uuid import UUID

import logfire
from pydantic import ValidationError

from threadline.domain.model import (
    CommentCreated,
    CommentDeleted,
    CommentEvent,
    CommentPage,
    CommentReacted,
    CommentUpdated,
    CommentView,
)
from threadline.domain.model.event import EVENT_TYPES, parse_event
from threadline.domain.value import CommentId


class CommentFeed:
    """Ordered comments of one scope (top-level or the replies of a comment)."""

    def __init__(self, parent_id: Optional[CommentId] = None) -> None:
        self.parent_id = parent_id
        self.items: list[CommentView] = []
        # Events can arrive twice (global and thread room); counts move once per id
        self._counted_replies: set[CommentId] = set()
        self._deleted: set[CommentId] = set()

    def reset(self, items: list[CommentView]) -> None:
        """Replace local state with a freshly fetched page."""
        self.items = list(items)
        self._counted_replies.clear()
        self._deleted.clear()

    def ids(self) -> list[CommentId]:
        return [item.id for item in self.items]

    def apply(self, event: CommentEvent) -> bool:
        """Apply an event; returns whether local state changed."""
        if isinstance(event, CommentCreated):
            return self._on_created(event.comment)
        if isinstance(event, (CommentUpdated, CommentReacted)):
            return self._replace(event.comment)
        if isinstance(event, CommentDeleted):
            return self._on_deleted(event)
        return False

    def _index(self, comment_id: CommentId) -> Optional[int]:
        for index, item in enumerate(self.items):
            if item.id == comment_id:
                return index
        return None

    def _on_created(self, comment: CommentView) -> bool:
        if comment.parent_id == self.parent_id:
            if self._index(comment.id) is not None:
                return False
            self.items.insert(0, comment)
            return True

        # A reply to one of our comments only moves its counter
        if comment.parent_id is not None and comment.id not in self._counted_replies:
            self._counted_replies.add(comment.id)
            return self._adjust_reply_count(comment.parent_id, 1)
        return False

    def _replace(self, comment: CommentView) -> bool:
        index = self._index(comment.id)
        if index is None:
            return False
        self.items[index] = comment
        return True

    def _on_deleted(self, event: CommentDeleted) -> bool:
        if event.id in self._deleted:
            return False
        self._deleted.add(event.id)

        changed = False
        index = self._index(event.id)
        if index is not None:
            del self.items[index]
            changed = True
        if event.parent_id is not None and event.parent_id != self.parent_id:
            changed = self._adjust_reply_count(event.parent_id, -1) or changed
        return changed

    def _adjust_reply_count(self, parent_id: CommentId, delta: int) -> bool:
        index = self._index(parent_id)
        if index is None:
            return False
        parent = self.items[index]
        self.items[index] = parent.model_copy(
            update={"reply_count": max(0, parent.reply_count + delta)}
        )
        return True


class CommentSubscriber:
    """Connection-level state of a client following comments.

    Produces the join/leave messages to send and consumes every message
    received on the socket.
    """

    def __init__(self, thread_id: Optional[CommentId] = None) -> None:
        self.thread_id = thread_id
        self.feed = CommentFeed(parent_id=thread_id)
        self.connection_id: Optional[str] = None
        self.connected = False
        self.joined_threads: set[str] = set()
        self.needs_resync = True

    @staticmethod
    def join_message(thread_id: CommentId | UUID | str) -> dict[str, str]:
        return {"action": "join", "thread_id": str(thread_id)}

    @staticmethod
    def leave_message(thread_id: CommentId | UUID | str) -> dict[str, str]:
        return {"action": "leave", "thread_id": str(thread_id)}

    def subscribe_messages(self) -> list[dict[str, str]]:
        """Messages to send right after (re)connecting."""
        if self.thread_id is None:
            return []
        return [self.join_message(self.thread_id)]

    def switch_thread(self, thread_id: Optional[CommentId]) -> list[dict[str, str]]:
        """Follow another thread (None for top-level comments).

        Returns:
            Leave/join messages to send; the feed must be resynced afterwards
        """
        messages = [self.leave_message(joined) for joined in sorted(self.joined_threads)]
        self.thread_id = thread_id
        self.feed = CommentFeed(parent_id=thread_id)
        self.needs_resync = True
        if thread_id is not None:
            messages.append(self.join_message(thread_id))
        return messages

    def resync(self, page: CommentPage) -> None:
        """Load the freshly fetched first page."""
        self.feed.reset(page.items)
        self.needs_resync = False

    def on_disconnect(self) -> None:
        """Drop connection state; events sent meanwhile are lost."""
        self.connected = False
        self.connection_id = None
        self.joined_threads.clear()
        self.needs_resync = True

    def handle(self, message: dict[str, Any]) -> Optional[CommentEvent]:
        """Consume one server message.

        Returns:
            The comment event it carried, if any
        """
        message_type = message.get("type")

        if message_type == "connected":
            self.connected = True
            self.connection_id = message.get("connection_id")
            return None
        if message_type == "thread:joined":
            self.joined_threads.add(str(message.get("thread_id")))
            return None
        if message_type == "thread:left":
            self.joined_threads.discard(str(message.get("thread_id")))
            return None
        if message_type == "error":
            logfire.warn("Server rejected message", detail=message.get("detail"))
            return None
        if message_type not in EVENT_TYPES:
            logfire.debug("Ignoring unknown message", message_type=message_type)
            return None

        try:
            event = parse_event(message)
        except ValidationError as e:
            logfire.warn("Malformed comment event", error=str(e))
            return None

        self.feed.apply(event)
        return event
