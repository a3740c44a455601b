"""PostgreSQL implementation of Comment repository."""

from datetime import datetime
from typing import Optional, Sequence

from sqlalchemy import Column, any_, case, func, literal, select, update
from sqlalchemy.dialects.postgresql import ARRAY, UUID
from sqlalchemy.ext.asyncio import AsyncSession

from threadline.domain.model import Comment
from threadline.domain.repository import CommentRepository
from threadline.domain.value import CommentId, ReactionKind, SortMode, UserId
from threadline.persistence.mappers import comment_to_dict, row_to_comment
from threadline.persistence.tables import comments_table

_UUID_ARRAY = ARRAY(UUID(as_uuid=True))


def _reaction_column(kind: ReactionKind) -> Column:
    if kind is ReactionKind.LIKE:
        return comments_table.c.likers
    return comments_table.c.dislikers


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository.

    Mutating methods commit before returning, so an event published after
    the call always describes durable state.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @staticmethod
    def _children_of(parent_id: Optional[CommentId]):
        if parent_id is None:
            return comments_table.c.parent_id.is_(None)
        return comments_table.c.parent_id == parent_id

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID, including soft-deleted ones."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_comment(dict(row)) if row else None

    async def find_by_parent(
        self,
        parent_id: Optional[CommentId],
        sort: SortMode,
        offset: int,
        limit: int,
    ) -> list[Comment]:
        """Find one page of live children of a parent."""
        stmt = (
            select(comments_table)
            .where(self._children_of(parent_id))
            .where(comments_table.c.is_deleted.is_(False))
        )

        if sort is SortMode.MOST_LIKED:
            stmt = stmt.order_by(func.cardinality(comments_table.c.likers).desc())
        elif sort is SortMode.MOST_DISLIKED:
            stmt = stmt.order_by(func.cardinality(comments_table.c.dislikers).desc())

        # Newest first, also the tie-break for the reaction orders
        stmt = (
            stmt.order_by(comments_table.c.created_at.desc(), comments_table.c.id.desc())
            .offset(offset)
            .limit(limit)
        )

        result = await self.session.execute(stmt)
        return [row_to_comment(dict(row)) for row in result.mappings().all()]

    async def count_by_parent(self, parent_id: Optional[CommentId]) -> int:
        """Count live children of a parent."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(self._children_of(parent_id))
            .where(comments_table.c.is_deleted.is_(False))
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def count_replies(
        self, parent_ids: Sequence[CommentId]
    ) -> dict[CommentId, int]:
        """Count live replies for several comments with one grouped query."""
        counts: dict[CommentId, int] = {parent_id: 0 for parent_id in parent_ids}
        if not counts:
            return counts

        stmt = (
            select(comments_table.c.parent_id, func.count().label("reply_count"))
            .where(comments_table.c.parent_id.in_(list(counts)))
            .where(comments_table.c.is_deleted.is_(False))
            .group_by(comments_table.c.parent_id)
        )
        result = await self.session.execute(stmt)
        for row in result.all():
            counts[CommentId(row.parent_id)] = row.reply_count
        return counts

    async def create(self, comment: Comment) -> Comment:
        """Insert a new comment."""
        stmt = (
            comments_table.insert()
            .values(**comment_to_dict(comment))
            .returning(comments_table)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().one()
        await self.session.commit()
        return row_to_comment(dict(row))

    async def update_content(
        self, comment_id: CommentId, content: str, edited_at: datetime
    ) -> Optional[Comment]:
        """Replace content of a live comment and mark it edited."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .where(comments_table.c.is_deleted.is_(False))
            .values(
                content=content,
                is_edited=True,
                edited_at=edited_at,
                updated_at=edited_at,
            )
            .returning(comments_table)
        )
        return await self._update_one(stmt)

    async def soft_delete(self, comment_id: CommentId) -> Optional[Comment]:
        """Flip the soft-delete flag of a live comment."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .where(comments_table.c.is_deleted.is_(False))
            .values(is_deleted=True, updated_at=func.now())
            .returning(comments_table)
        )
        return await self._update_one(stmt)

    async def toggle_reaction(
        self, comment_id: CommentId, user_id: UserId, kind: ReactionKind
    ) -> Optional[Comment]:
        """Toggle a reaction with a single conditional UPDATE.

        Both arrays are rewritten from their current values inside the
        statement, so concurrent toggles serialize on the row lock instead
        of overwriting each other.
        """
        target = _reaction_column(kind)
        opposite = _reaction_column(kind.opposite)
        user = literal(user_id, type_=UUID(as_uuid=True))

        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .where(comments_table.c.is_deleted.is_(False))
            .values(
                {
                    target: case(
                        (
                            user == any_(target),
                            func.array_remove(target, user, type_=_UUID_ARRAY),
                        ),
                        else_=func.array_append(target, user, type_=_UUID_ARRAY),
                    ),
                    opposite: func.array_remove(opposite, user, type_=_UUID_ARRAY),
                    comments_table.c.updated_at: func.now(),
                }
            )
            .returning(comments_table)
        )
        return await self._update_one(stmt)

    async def _update_one(self, stmt) -> Optional[Comment]:
        result = await self.session.execute(stmt)
        row = result.mappings().first()

        if row is None:
            # Comment not found or deleted
            return None

        await self.session.commit()
        return row_to_comment(dict(row))
