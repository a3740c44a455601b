"""In-memory comment repository for testing."""

from datetime import datetime
from itertools import count
from typing import Optional, Sequence

from threadline.domain.model.comment import Comment
from threadline.domain.model.common import utcnow
from threadline.domain.repository.comment import CommentRepository
from threadline.domain.value import CommentId, ReactionKind, SortMode, UserId


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}
        # Insertion order breaks ties between equal timestamps
        self._sequence: dict[CommentId, int] = {}
        self._counter = count()

    def _live_children(self, parent_id: Optional[CommentId]) -> list[Comment]:
        return [
            c
            for c in self._comments.values()
            if c.parent_id == parent_id and not c.is_deleted
        ]

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_by_parent(
        self,
        parent_id: Optional[CommentId],
        sort: SortMode,
        offset: int,
        limit: int,
    ) -> list[Comment]:
        """Find one page of live children of a parent."""
        comments = self._live_children(parent_id)

        # Newest first, then stable-sort by reaction count
        comments.sort(key=lambda c: (c.created_at, self._sequence[c.id]), reverse=True)
        if sort is SortMode.MOST_LIKED:
            comments.sort(key=lambda c: len(c.likers), reverse=True)
        elif sort is SortMode.MOST_DISLIKED:
            comments.sort(key=lambda c: len(c.dislikers), reverse=True)

        return comments[offset : offset + limit]

    async def count_by_parent(self, parent_id: Optional[CommentId]) -> int:
        """Count live children of a parent."""
        return len(self._live_children(parent_id))

    async def count_replies(
        self, parent_ids: Sequence[CommentId]
    ) -> dict[CommentId, int]:
        """Count live replies for several comments."""
        return {
            parent_id: len(self._live_children(parent_id)) for parent_id in parent_ids
        }

    async def create(self, comment: Comment) -> Comment:
        """Store a new comment."""
        self._comments[comment.id] = comment
        self._sequence[comment.id] = next(self._counter)
        return comment

    async def update_content(
        self, comment_id: CommentId, content: str, edited_at: datetime
    ) -> Optional[Comment]:
        """Replace content of a live comment and mark it edited."""
        return self._replace_live(
            comment_id,
            content=content,
            is_edited=True,
            edited_at=edited_at,
            updated_at=edited_at,
        )

    async def soft_delete(self, comment_id: CommentId) -> Optional[Comment]:
        """Flip the soft-delete flag of a live comment."""
        return self._replace_live(comment_id, is_deleted=True, updated_at=utcnow())

    async def toggle_reaction(
        self, comment_id: CommentId, user_id: UserId, kind: ReactionKind
    ) -> Optional[Comment]:
        """Toggle a reaction; no await between read and write."""
        comment = self._comments.get(comment_id)
        if not comment or comment.is_deleted:
            return None

        current = comment.reactors(kind)
        if user_id in current:
            updated_target = current - {user_id}
        else:
            updated_target = current | {user_id}
        updated_opposite = comment.reactors(kind.opposite) - {user_id}

        if kind is ReactionKind.LIKE:
            likers, dislikers = updated_target, updated_opposite
        else:
            likers, dislikers = updated_opposite, updated_target

        return self._replace_live(
            comment_id, likers=likers, dislikers=dislikers, updated_at=utcnow()
        )

    def _replace_live(self, comment_id: CommentId, **changes) -> Optional[Comment]:
        comment = self._comments.get(comment_id)
        if not comment or comment.is_deleted:
            return None
        updated = comment.model_copy(update=changes)
        self._comments[comment_id] = updated
        return updated
