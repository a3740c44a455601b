"""Read-side projections of comments.

These are what listings, single reads and broadcast events carry: the
comment with its author inlined and the live reply count attached. Pages
are serialized as-is into the listing cache.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field, computed_field, field_serializer

from threadline.domain.model.comment import Comment
from threadline.domain.model.user import User
from threadline.domain.value import CommentId, UserId
from threadline.domain.value.common import ValueObject


class CommentAuthor(ValueObject):
    """Author details inlined into a comment projection."""

    id: UserId
    name: str
    email: str
    avatar_url: Optional[str] = None

    @classmethod
    def from_user(cls, user: User) -> "CommentAuthor":
        return cls(
            id=user.id, name=user.name, email=user.email, avatar_url=user.avatar_url
        )

    @classmethod
    def unknown(cls, user_id: UserId) -> "CommentAuthor":
        """Placeholder for an author the user store no longer knows."""
        return cls(id=user_id, name="Unknown", email="")


class CommentView(ValueObject):
    """A non-deleted comment as clients see it."""

    id: CommentId
    author: CommentAuthor
    content: str
    parent_id: Optional[CommentId] = None
    likers: frozenset[UserId] = frozenset()
    dislikers: frozenset[UserId] = frozenset()
    is_edited: bool = False
    edited_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    reply_count: int = Field(default=0, ge=0)

    @computed_field
    @property
    def like_count(self) -> int:
        return len(self.likers)

    @computed_field
    @property
    def dislike_count(self) -> int:
        return len(self.dislikers)

    @field_serializer("likers", "dislikers")
    def serialize_reactors(self, value: frozenset[UserId]) -> list[UUID]:
        # Stable order keeps cached pages and event payloads byte-identical
        return sorted(value, key=str)

    @classmethod
    def build(
        cls, comment: Comment, author: CommentAuthor, reply_count: int
    ) -> "CommentView":
        """Project a stored comment with its author and reply count."""
        return cls(
            id=comment.id,
            author=author,
            content=comment.content,
            parent_id=comment.parent_id,
            likers=comment.likers,
            dislikers=comment.dislikers,
            is_edited=comment.is_edited,
            edited_at=comment.edited_at,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
            reply_count=reply_count,
        )


class CommentPage(ValueObject):
    """One page of a comment listing."""

    items: list[CommentView]
    total_count: int = Field(ge=0)
    page: int = Field(ge=1)
    total_pages: int = Field(ge=0)
