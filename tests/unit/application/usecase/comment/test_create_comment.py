"""Unit tests for CreateCommentUseCase."""

from uuid import uuid4

import pytest

from threadline.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentUseCase,
)
from threadline.domain.error import (
    InvalidInputError,
    NotFoundError,
    UnauthenticatedError,
)
from threadline.domain.repository import UserRepository
from tests.conftest import make_token, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestCreateCommentUseCase:
    """Tests for CreateCommentUseCase."""

    @pytest.mark.asyncio
    async def test_create_comment_as_token_holder(self, unit_env):
        """The token's user becomes the author."""
        # Arrange
        use_case = await unit_env.get(CreateCommentUseCase)
        user_repo = await unit_env.get(UserRepository)
        user = await user_repo.save(make_user("Grace"))

        # Act
        response = await use_case.execute(
            CreateCommentRequest(content="First!", auth_token=make_token(user))
        )

        # Assert
        assert response.comment.author.id == user.id
        assert response.comment.author.name == "Grace"
        assert response.comment.content == "First!"

    @pytest.mark.asyncio
    async def test_create_reply(self, unit_env):
        """A parent_id string creates a reply."""
        # Arrange
        use_case = await unit_env.get(CreateCommentUseCase)
        user_repo = await unit_env.get(UserRepository)
        user = await user_repo.save(make_user())
        token = make_token(user)
        parent = await use_case.execute(
            CreateCommentRequest(content="Parent", auth_token=token)
        )

        # Act
        response = await use_case.execute(
            CreateCommentRequest(
                content="Reply",
                parent_id=str(parent.comment.id),
                auth_token=token,
            )
        )

        # Assert
        assert response.comment.parent_id == parent.comment.id

    @pytest.mark.asyncio
    async def test_missing_token_is_unauthenticated(self, unit_env):
        """Anonymous callers can't post."""
        # Arrange
        use_case = await unit_env.get(CreateCommentUseCase)

        # Act & Assert
        with pytest.raises(UnauthenticatedError):
            await use_case.execute(CreateCommentRequest(content="Hello"))

    @pytest.mark.asyncio
    async def test_invalid_token_is_unauthenticated(self, unit_env):
        """A forged token is rejected."""
        # Arrange
        use_case = await unit_env.get(CreateCommentUseCase)

        # Act & Assert
        with pytest.raises(UnauthenticatedError):
            await use_case.execute(
                CreateCommentRequest(content="Hello", auth_token="not-a-jwt")
            )

    @pytest.mark.asyncio
    async def test_malformed_parent_id(self, unit_env):
        """A parent_id that isn't a UUID is invalid input."""
        # Arrange
        use_case = await unit_env.get(CreateCommentUseCase)
        user_repo = await unit_env.get(UserRepository)
        user = await user_repo.save(make_user())

        # Act & Assert
        with pytest.raises(InvalidInputError, match="parent_id"):
            await use_case.execute(
                CreateCommentRequest(
                    content="Reply", parent_id="nope", auth_token=make_token(user)
                )
            )

    @pytest.mark.asyncio
    async def test_unknown_parent(self, unit_env):
        """A well-formed but unknown parent is NotFound."""
        # Arrange
        use_case = await unit_env.get(CreateCommentUseCase)
        user_repo = await unit_env.get(UserRepository)
        user = await user_repo.save(make_user())

        # Act & Assert
        with pytest.raises(NotFoundError):
            await use_case.execute(
                CreateCommentRequest(
                    content="Reply",
                    parent_id=str(uuid4()),
                    auth_token=make_token(user),
                )
            )
