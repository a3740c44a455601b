"""Broadcast events emitted after a comment mutation commits.

Events form a tagged union on ``type``. The wire form of an event is simply
its JSON dump, so clients can parse it back with ``parse_event``.
"""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import Field, TypeAdapter

from threadline.domain.model.projection import CommentView
from threadline.domain.value import CommentId
from threadline.domain.value.common import ValueObject


class CommentEventType(str, Enum):
    """Kinds of comment events; the values are the wire tags."""

    CREATED = "comment:created"
    UPDATED = "comment:updated"
    DELETED = "comment:deleted"
    REACTED = "comment:reacted"


class _CommentPayloadEvent(ValueObject):
    comment: CommentView

    @property
    def comment_id(self) -> CommentId:
        return self.comment.id

    @property
    def parent_id(self) -> Optional[CommentId]:
        return self.comment.parent_id


class CommentCreated(_CommentPayloadEvent):
    type: Literal["comment:created"] = "comment:created"


class CommentUpdated(_CommentPayloadEvent):
    type: Literal["comment:updated"] = "comment:updated"


class CommentReacted(_CommentPayloadEvent):
    type: Literal["comment:reacted"] = "comment:reacted"


class CommentDeleted(ValueObject):
    """Deletion carries only what subscribers need to drop the entry."""

    type: Literal["comment:deleted"] = "comment:deleted"
    id: CommentId
    parent_id: Optional[CommentId] = None

    @property
    def comment_id(self) -> CommentId:
        return self.id


CommentEvent = Annotated[
    Union[CommentCreated, CommentUpdated, CommentDeleted, CommentReacted],
    Field(discriminator="type"),
]

EVENT_TYPES = frozenset(t.value for t in CommentEventType)

_event_adapter: TypeAdapter[CommentEvent] = TypeAdapter(CommentEvent)


def parse_event(message: dict) -> CommentEvent:
    """Parse a wire message back into a comment event.

    Raises:
        pydantic.ValidationError: If the message is not a comment event
    """
    return _event_adapter.validate_python(message)


def event_to_message(event: CommentEvent) -> dict:
    """Wire form of an event."""
    return event.model_dump(mode="json")
