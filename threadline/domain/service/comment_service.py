"""Comment domain service.

Every mutation runs the same three effects in order: write the store,
clear the listing cache, publish the event. Only the store write can fail
the operation; cache and broadcast failures are logged by their services.
"""

import math
from typing import Sequence
from uuid import uuid4

import logfire
from pydantic import ValidationError

from threadline.domain.error import ForbiddenError, InvalidInputError, NotFoundError
from threadline.domain.model import (
    Comment,
    CommentAuthor,
    CommentCreated,
    CommentDeleted,
    CommentPage,
    CommentReacted,
    CommentUpdated,
    CommentView,
)
from threadline.domain.model.common import utcnow
from threadline.domain.repository import CommentRepository
from threadline.domain.value import CommentId, ReactionKind, SortMode, UserId
from threadline.domain.value.types import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    MAX_CONTENT_LENGTH,
    MAX_OFFSET,
    MAX_PAGE_SIZE,
)

from .base import Service
from .broadcast_service import BroadcastService
from .cache_service import ListingCacheService
from .user_service import UserService


def normalize_content(content: str) -> str:
    """Trim surrounding whitespace and enforce the length bounds.

    Raises:
        InvalidInputError: If the trimmed content is empty or too long
    """
    trimmed = content.strip()
    if not trimmed:
        raise InvalidInputError("Comment content cannot be empty")
    if len(trimmed) > MAX_CONTENT_LENGTH:
        raise InvalidInputError(
            f"Comment content cannot exceed {MAX_CONTENT_LENGTH} characters"
        )
    return trimmed


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        user_service: UserService,
        cache_service: ListingCacheService,
        broadcast_service: BroadcastService,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            user_service: Resolves authors for projections
            cache_service: Listing cache
            broadcast_service: Real-time event fan-out
        """
        self.comment_repository = comment_repository
        self.user_service = user_service
        self.cache_service = cache_service
        self.broadcast_service = broadcast_service

    async def create(
        self,
        author_id: UserId,
        content: str,
        parent_id: CommentId | None = None,
    ) -> CommentView:
        """Create a top-level comment or a reply.

        Args:
            author_id: Author user ID
            content: Comment text
            parent_id: Comment being replied to (None for top-level)

        Returns:
            Created comment with its author inlined

        Raises:
            InvalidInputError: If content is empty or too long
            NotFoundError: If the author or the parent comment doesn't exist
        """
        with logfire.span(
            "comment_service.create",
            author_id=str(author_id),
            parent_id=str(parent_id) if parent_id else None,
        ):
            content = normalize_content(content)
            author = await self.user_service.get_by_id(author_id)

            if parent_id:
                parent = await self.comment_repository.find_by_id(parent_id)
                if not parent or parent.is_deleted:
                    logfire.warn("Parent comment not found", parent_id=str(parent_id))
                    raise NotFoundError("Comment", str(parent_id))

            now = utcnow()
            comment = Comment(
                id=CommentId(uuid4()),
                author_id=author_id,
                content=content,
                parent_id=parent_id,
                created_at=now,
                updated_at=now,
            )
            saved = await self.comment_repository.create(comment)
            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                parent_id=str(parent_id) if parent_id else None,
            )

            view = CommentView.build(saved, CommentAuthor.from_user(author), 0)
            await self.cache_service.invalidate_listings()
            await self.broadcast_service.publish(CommentCreated(comment=view))
            return view

    async def list_comments(
        self,
        parent_id: CommentId | None = None,
        page: int = DEFAULT_PAGE,
        page_size: int = DEFAULT_PAGE_SIZE,
        sort: SortMode = SortMode.NEWEST,
    ) -> CommentPage:
        """List one page of live comments under a parent, read through the cache.

        Args:
            parent_id: Parent comment ID (None lists top-level comments)
            page: 1-indexed page number
            page_size: Items per page, capped at ``MAX_PAGE_SIZE``
            sort: Listing order

        Returns:
            Page with reply counts and authors populated

        Raises:
            InvalidInputError: If page or page_size is below 1, or the page
                starts beyond the largest supported offset
        """
        if page < 1:
            raise InvalidInputError("page must be at least 1")
        if page_size < 1:
            raise InvalidInputError("page_size must be at least 1")
        page_size = min(page_size, MAX_PAGE_SIZE)
        if (page - 1) * page_size > MAX_OFFSET:
            raise InvalidInputError("page is out of range")

        with logfire.span(
            "comment_service.list_comments",
            parent_id=str(parent_id) if parent_id else None,
            page=page,
            page_size=page_size,
            sort=sort.value,
        ):
            key = ListingCacheService.listing_key(parent_id, sort, page, page_size)
            cached = await self.cache_service.get(key)
            if cached is not None:
                try:
                    return CommentPage.model_validate_json(cached)
                except ValidationError as e:
                    # Unreadable entry, rebuild it from the store
                    logfire.warn("Discarding corrupt cache entry", key=key, error=str(e))

            comments = await self.comment_repository.find_by_parent(
                parent_id, sort, offset=(page - 1) * page_size, limit=page_size
            )
            total_count = await self.comment_repository.count_by_parent(parent_id)
            result = CommentPage(
                items=await self._to_views(comments),
                total_count=total_count,
                page=page,
                total_pages=math.ceil(total_count / page_size),
            )

            await self.cache_service.set(key, result.model_dump_json())
            logfire.info(
                "Comments listed from store",
                parent_id=str(parent_id) if parent_id else None,
                count=len(result.items),
                total_count=total_count,
            )
            return result

    async def list_replies(
        self,
        parent_id: CommentId,
        page: int = DEFAULT_PAGE,
        page_size: int = DEFAULT_PAGE_SIZE,
        sort: SortMode = SortMode.NEWEST,
    ) -> CommentPage:
        """List direct replies of a comment."""
        return await self.list_comments(parent_id, page, page_size, sort)

    async def get_by_id(self, comment_id: CommentId) -> CommentView:
        """Get a live comment with author and reply count. Never cached.

        Raises:
            NotFoundError: If the comment doesn't exist or is deleted
        """
        with logfire.span("comment_service.get_by_id", comment_id=str(comment_id)):
            comment = await self._get_live(comment_id)
            return await self._to_view(comment)

    async def update(
        self, comment_id: CommentId, requester_id: UserId, content: str
    ) -> CommentView:
        """Edit the content of a comment.

        Args:
            comment_id: Comment ID
            requester_id: User asking for the edit
            content: Replacement text

        Returns:
            Updated comment

        Raises:
            InvalidInputError: If content is empty or too long
            NotFoundError: If the comment doesn't exist or is deleted
            ForbiddenError: If the requester is not the author
        """
        with logfire.span(
            "comment_service.update",
            comment_id=str(comment_id),
            requester_id=str(requester_id),
        ):
            content = normalize_content(content)
            existing = await self._get_live(comment_id)
            self._check_author(existing, requester_id)

            updated = await self.comment_repository.update_content(
                comment_id, content, utcnow()
            )
            if not updated:
                # Deleted between the ownership check and the write
                raise NotFoundError("Comment", str(comment_id))
            logfire.info("Comment updated", comment_id=str(comment_id))

            view = await self._to_view(updated)
            await self.cache_service.invalidate_listings()
            await self.broadcast_service.publish(CommentUpdated(comment=view))
            return view

    async def delete(self, comment_id: CommentId, requester_id: UserId) -> None:
        """Soft-delete a comment. Replies are left in place.

        Raises:
            NotFoundError: If the comment doesn't exist or is already deleted
            ForbiddenError: If the requester is not the author
        """
        with logfire.span(
            "comment_service.delete",
            comment_id=str(comment_id),
            requester_id=str(requester_id),
        ):
            existing = await self._get_live(comment_id)
            self._check_author(existing, requester_id)

            deleted = await self.comment_repository.soft_delete(comment_id)
            if not deleted:
                raise NotFoundError("Comment", str(comment_id))
            logfire.info("Comment deleted", comment_id=str(comment_id))

            await self.cache_service.invalidate_listings()
            await self.broadcast_service.publish(
                CommentDeleted(id=deleted.id, parent_id=deleted.parent_id)
            )

    async def react(
        self, comment_id: CommentId, user_id: UserId, kind: ReactionKind
    ) -> CommentView:
        """Toggle a like or dislike.

        Reacting with the kind already held removes it; otherwise the
        opposite reaction is dropped and ``kind`` is added.

        Raises:
            NotFoundError: If the comment doesn't exist or is deleted
        """
        with logfire.span(
            "comment_service.react",
            comment_id=str(comment_id),
            user_id=str(user_id),
            kind=kind.value,
        ):
            updated = await self.comment_repository.toggle_reaction(
                comment_id, user_id, kind
            )
            if not updated:
                logfire.warn("Comment not found for reaction", comment_id=str(comment_id))
                raise NotFoundError("Comment", str(comment_id))
            logfire.info(
                "Reaction toggled",
                comment_id=str(comment_id),
                like_count=len(updated.likers),
                dislike_count=len(updated.dislikers),
            )

            view = await self._to_view(updated)
            await self.cache_service.invalidate_listings()
            await self.broadcast_service.publish(CommentReacted(comment=view))
            return view

    async def _get_live(self, comment_id: CommentId) -> Comment:
        comment = await self.comment_repository.find_by_id(comment_id)
        if not comment or comment.is_deleted:
            logfire.warn("Comment not found", comment_id=str(comment_id))
            raise NotFoundError("Comment", str(comment_id))
        return comment

    @staticmethod
    def _check_author(comment: Comment, requester_id: UserId) -> None:
        if comment.author_id != requester_id:
            logfire.warn(
                "Comment modification forbidden",
                comment_id=str(comment.id),
                requester_id=str(requester_id),
            )
            raise ForbiddenError("Comment", str(comment.id), str(requester_id))

    async def _to_view(self, comment: Comment) -> CommentView:
        views = await self._to_views([comment])
        return views[0]

    async def _to_views(self, comments: Sequence[Comment]) -> list[CommentView]:
        """Attach authors and live reply counts, two batched lookups per page."""
        if not comments:
            return []

        reply_counts = await self.comment_repository.count_replies(
            [c.id for c in comments]
        )
        authors = await self.user_service.get_authors([c.author_id for c in comments])
        return [
            CommentView.build(c, authors[c.author_id], reply_counts.get(c.id, 0))
            for c in comments
        ]

