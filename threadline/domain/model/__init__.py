"""Domain model entities for Threadline."""

from threadline.domain.model.comment import Comment
from threadline.domain.model.event import (
    CommentCreated,
    CommentDeleted,
    CommentEvent,
    CommentEventType,
    CommentReacted,
    CommentUpdated,
)
from threadline.domain.model.projection import CommentAuthor, CommentPage, CommentView
from threadline.domain.model.user import User

__all__ = [
    "User",
    "Comment",
    "CommentAuthor",
    "CommentView",
    "CommentPage",
    "CommentEvent",
    "CommentEventType",
    "CommentCreated",
    "CommentUpdated",
    "CommentDeleted",
    "CommentReacted",
]
