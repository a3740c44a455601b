"""Comment entity.

Comments form a shallow reply tree: a comment either has no parent
(top-level) or points at the comment it replies to. Deletion is soft, so
replies keep a valid parent reference after their parent is removed.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from threadline.domain.model.common import DomainModel, utcnow
from threadline.domain.value import CommentId, ReactionKind, UserId
from threadline.domain.value.types import MAX_CONTENT_LENGTH


class Comment(DomainModel):
    """Comment entity.

    Reactions are stored as two sets of user ids. A user is in at most
    one of them at a time.
    """

    id: CommentId
    author_id: UserId
    content: str = Field(min_length=1, max_length=MAX_CONTENT_LENGTH)
    parent_id: Optional[CommentId] = None
    likers: frozenset[UserId] = frozenset()
    dislikers: frozenset[UserId] = frozenset()
    is_deleted: bool = False
    is_edited: bool = False
    edited_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @model_validator(mode="after")
    def check_reactions_disjoint(self) -> "Comment":
        """Reject a comment whose likers and dislikers overlap."""
        overlap = self.likers & self.dislikers
        if overlap:
            raise ValueError(
                f"Users cannot both like and dislike a comment: {sorted(map(str, overlap))}"
            )
        return self

    def reactors(self, kind: ReactionKind) -> frozenset[UserId]:
        """Users holding the given reaction."""
        if kind is ReactionKind.LIKE:
            return self.likers
        return self.dislikers
