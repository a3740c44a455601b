"""Unit tests for the comment listing and reaction use cases."""

import pytest

from threadline.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentUseCase,
    ListCommentsRequest,
    ListCommentsUseCase,
    ListRepliesRequest,
    ListRepliesUseCase,
    ReactToCommentRequest,
    ReactToCommentUseCase,
)
from threadline.domain.error import InvalidInputError, UnauthenticatedError
from threadline.domain.repository import UserRepository
from threadline.domain.value import ReactionKind, SortMode
from tests.conftest import make_token, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestListCommentsUseCase:
    """Tests for ListCommentsUseCase and ListRepliesUseCase."""

    @pytest.mark.asyncio
    async def test_lists_top_level_and_replies(self, unit_env):
        """Top-level listing carries reply counts; replies list separately."""
        # Arrange
        create = await unit_env.get(CreateCommentUseCase)
        list_comments = await unit_env.get(ListCommentsUseCase)
        list_replies = await unit_env.get(ListRepliesUseCase)
        user_repo = await unit_env.get(UserRepository)
        token = make_token(await user_repo.save(make_user()))

        parent = (
            await create.execute(CreateCommentRequest(content="A", auth_token=token))
        ).comment
        reply = (
            await create.execute(
                CreateCommentRequest(
                    content="B", parent_id=str(parent.id), auth_token=token
                )
            )
        ).comment

        # Act
        top_level = await list_comments.execute(ListCommentsRequest())
        replies = await list_replies.execute(
            ListRepliesRequest(comment_id=str(parent.id))
        )
        by_parent = await list_comments.execute(
            ListCommentsRequest(parent_id=str(parent.id))
        )

        # Assert
        assert [c.id for c in top_level.items] == [parent.id]
        assert top_level.items[0].reply_count == 1
        assert top_level.total_count == 1
        assert top_level.total_pages == 1
        assert [c.id for c in replies.items] == [reply.id]
        assert by_parent == replies

    @pytest.mark.asyncio
    async def test_request_accepts_sort_strings(self, unit_env):
        """Sort modes parse from their wire names."""
        # Act
        request = ListCommentsRequest(sort="most-liked", page=2, page_size=5)

        # Assert
        assert request.sort is SortMode.MOST_LIKED

    @pytest.mark.asyncio
    async def test_invalid_page(self, unit_env):
        """Page 0 is invalid input."""
        # Arrange
        list_comments = await unit_env.get(ListCommentsUseCase)

        # Act & Assert
        with pytest.raises(InvalidInputError):
            await list_comments.execute(ListCommentsRequest(page=0))

    @pytest.mark.asyncio
    async def test_malformed_parent_id(self, unit_env):
        """A parent_id that isn't a UUID is invalid input."""
        # Arrange
        list_comments = await unit_env.get(ListCommentsUseCase)

        # Act & Assert
        with pytest.raises(InvalidInputError, match="parent_id"):
            await list_comments.execute(ListCommentsRequest(parent_id="abc"))


class TestReactToCommentUseCase:
    """Tests for ReactToCommentUseCase."""

    @pytest.mark.asyncio
    async def test_toggle_like(self, unit_env):
        """Liking twice removes the like."""
        # Arrange
        create = await unit_env.get(CreateCommentUseCase)
        react = await unit_env.get(ReactToCommentUseCase)
        user_repo = await unit_env.get(UserRepository)
        token = make_token(await user_repo.save(make_user()))
        comment = (
            await create.execute(CreateCommentRequest(content="A", auth_token=token))
        ).comment
        request = ReactToCommentRequest(
            comment_id=str(comment.id), type="like", auth_token=token
        )

        # Act
        first = await react.execute(request)
        second = await react.execute(request)

        # Assert
        assert first.comment.like_count == 1
        assert second.comment.like_count == 0

    @pytest.mark.asyncio
    async def test_request_accepts_field_name(self, unit_env):
        """Both the wire alias and the field name populate the kind."""
        # Act
        by_alias = ReactToCommentRequest(comment_id="x", type="dislike")
        by_name = ReactToCommentRequest(comment_id="x", kind=ReactionKind.DISLIKE)

        # Assert
        assert by_alias.kind is ReactionKind.DISLIKE
        assert by_name.kind is ReactionKind.DISLIKE

    @pytest.mark.asyncio
    async def test_requires_token(self, unit_env):
        """Anonymous reactions are rejected."""
        # Arrange
        react = await unit_env.get(ReactToCommentUseCase)

        # Act & Assert
        with pytest.raises(UnauthenticatedError):
            await react.execute(ReactToCommentRequest(comment_id="x", type="like"))
