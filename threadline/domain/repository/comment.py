"""Comment repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, Sequence

from threadline.domain.model.comment import Comment
from threadline.domain.value import CommentId, ReactionKind, SortMode, UserId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Every mutating method is a single atomic write against one comment and
    is durable once it returns. Reads exclude soft-deleted comments except
    ``find_by_id``, which returns the stored row as-is.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID, including soft-deleted ones.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_parent(
        self,
        parent_id: Optional[CommentId],
        sort: SortMode,
        offset: int,
        limit: int,
    ) -> list[Comment]:
        """Find non-deleted direct children of a parent, one page at a time.

        Args:
            parent_id: Parent comment ID, or None for top-level comments
            sort: Listing order; reaction orders break ties by newest first
            offset: Number of comments to skip
            limit: Maximum number of comments to return

        Returns:
            Comments in the requested order
        """
        pass

    @abstractmethod
    async def count_by_parent(self, parent_id: Optional[CommentId]) -> int:
        """Count non-deleted direct children of a parent (None = top-level)."""
        pass

    @abstractmethod
    async def count_replies(
        self, parent_ids: Sequence[CommentId]
    ) -> dict[CommentId, int]:
        """Count non-deleted replies for several comments in one query.

        Args:
            parent_ids: Comments whose replies to count

        Returns:
            Mapping with an entry (possibly 0) for every requested ID
        """
        pass

    @abstractmethod
    async def create(self, comment: Comment) -> Comment:
        """Persist a new comment.

        Args:
            comment: The comment to insert

        Returns:
            The stored comment
        """
        pass

    @abstractmethod
    async def update_content(
        self, comment_id: CommentId, content: str, edited_at: datetime
    ) -> Optional[Comment]:
        """Replace content and mark the comment edited, unless it is deleted.

        Returns:
            Updated comment, or None if it doesn't exist or is deleted
        """
        pass

    @abstractmethod
    async def soft_delete(self, comment_id: CommentId) -> Optional[Comment]:
        """Flip the soft-delete flag of a live comment.

        Returns:
            The deleted comment, or None if it doesn't exist or was already deleted
        """
        pass

    @abstractmethod
    async def toggle_reaction(
        self, comment_id: CommentId, user_id: UserId, kind: ReactionKind
    ) -> Optional[Comment]:
        """Atomically toggle a user's reaction on a live comment.

        If the user already holds ``kind`` it is removed; otherwise the
        opposite reaction is removed and ``kind`` is added. The whole toggle
        is one conditional write, so concurrent toggles from different users
        never lose each other's changes.

        Returns:
            Updated comment, or None if it doesn't exist or is deleted
        """
        pass
