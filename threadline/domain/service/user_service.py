"""User domain service."""

from typing import Sequence

import logfire

from threadline.domain.error import NotFoundError
from threadline.domain.model import CommentAuthor, User
from threadline.domain.repository import UserRepository
from threadline.domain.value import UserId

from .base import Service


class UserService(Service):
    """Domain service for user lookups."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User entity

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            return user

    async def get_authors(
        self, user_ids: Sequence[UserId]
    ) -> dict[UserId, CommentAuthor]:
        """Resolve author details for a batch of user IDs.

        Users that no longer exist resolve to an "Unknown" placeholder so a
        listing never fails because of a dangling author reference.
        """
        if not user_ids:
            return {}

        # Batch query to avoid N+1 when projecting a page
        users = await self.user_repository.find_by_ids(list(set(user_ids)))
        return {
            user_id: (
                CommentAuthor.from_user(users[user_id])
                if user_id in users
                else CommentAuthor.unknown(user_id)
            )
            for user_id in user_ids
        }
