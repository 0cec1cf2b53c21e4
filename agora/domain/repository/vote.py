"""Vote repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence
from uuid import UUID

from agora.domain.model.vote import Vote
from agora.domain.value import UserId, VotableType, VoteId


class VoteRepository(ABC):
    """Repository for Vote entity.

    Defines the contract for the vote ledger.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> Optional[Vote]:
        """Find a user's vote on a specific item.

        Args:
            user_id: The user's ID
            votable_type: Type of item (post or comment)
            votable_id: ID of the item

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_votable(
        self,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> List[Vote]:
        """Find all votes on a specific item.

        Args:
            votable_type: Type of item (post or comment)
            votable_id: ID of the item

        Returns:
            List of votes on the item
        """
        pass

    @abstractmethod
    async def find_by_votables(
        self,
        votable_type: VotableType,
        votable_ids: Sequence[UUID],
    ) -> List[Vote]:
        """Find all votes on multiple items (batch query).

        Args:
            votable_type: Type of items (post or comment)
            votable_ids: IDs of the items

        Returns:
            Votes on any of the items, in no particular order
        """
        pass

    @abstractmethod
    async def find_by_user_and_votables(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_ids: Sequence[UUID],
    ) -> List[Vote]:
        """Find a user's votes on multiple items (batch query).

        Args:
            user_id: The user's ID
            votable_type: Type of items (post or comment)
            votable_ids: List of item IDs to check

        Returns:
            List of votes by the user on the specified items
        """
        pass

    @abstractmethod
    async def save(self, vote: Vote) -> Vote:
        """Insert a new vote.

        Args:
            vote: The vote to save

        Returns:
            The saved vote

        Raises:
            IntegrityError: If a vote already exists for this
                user/votable combination
        """
        pass

    @abstractmethod
    async def update_value(self, vote_id: VoteId, value: int) -> Optional[Vote]:
        """Change the value of an existing vote.

        Args:
            vote_id: The vote to change
            value: New value (+1 or -1)

        Returns:
            The updated vote, or None if the row no longer exists
        """
        pass

    @abstractmethod
    async def delete(self, vote_id: VoteId) -> bool:
        """Delete a vote.

        Args:
            vote_id: The vote ID to delete

        Returns:
            True if a row was deleted
        """
        pass
