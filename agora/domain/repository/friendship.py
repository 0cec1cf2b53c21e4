"""Friendship repository interface."""

from abc import ABC, abstractmethod
from typing import Set

from agora.domain.model.friendship import Friendship
from agora.domain.value import UserId


class FriendshipRepository(ABC):
    """Repository for Friendship entity.

    Friendship is symmetric: a row in either direction links two users.
    """

    @abstractmethod
    async def find_friend_ids(self, user_id: UserId) -> Set[UserId]:
        """Find every user linked to ``user_id`` in either direction."""
        pass

    @abstractmethod
    async def are_friends(self, user_id: UserId, other_id: UserId) -> bool:
        """Check whether a link exists in either direction."""
        pass

    @abstractmethod
    async def save(self, friendship: Friendship) -> Friendship:
        """Insert a friendship.

        Raises:
            IntegrityError: If the same directed link already exists
        """
        pass

    @abstractmethod
    async def delete_link(self, user_id: UserId, other_id: UserId) -> bool:
        """Remove the link between two users, whichever direction it has.

        Returns:
            True if a link existed
        """
        pass
