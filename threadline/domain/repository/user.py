"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from threadline.domain.model.user import User
from threadline.domain.value import UserId


class UserRepository(ABC):
    """Repository for User entity.

    Defines the contract for user persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, user_ids: Sequence[UserId]) -> dict[UserId, User]:
        """Find several users at once.

        Args:
            user_ids: User IDs to look up (duplicates allowed)

        Returns:
            Mapping of found user ID to user; unknown IDs are absent
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: The user to save

        Returns:
            The saved user
        """
        pass
