"""In-memory vote repository for testing."""

from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from agora.domain.model.common import utc_now
from agora.domain.model.vote import Vote
from agora.domain.repository.vote import VoteRepository
from agora.domain.value import UserId, VotableType, VoteId


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing.

    Enforces the same (user, votable_type, votable_id) uniqueness as the
    database, raising IntegrityError on a duplicate insert.
    """

    def __init__(self) -> None:
        self._votes: dict[VoteId, Vote] = {}

    async def find_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> Optional[Vote]:
        """Find a vote by user and votable item."""
        for vote in self._votes.values():
            if (
                vote.user_id == user_id
                and vote.votable_type == votable_type
                and vote.votable_id == votable_id
            ):
                return vote
        return None

    async def find_by_votable(
        self,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> list[Vote]:
        """Find all votes for a votable item."""
        return [
            v
            for v in self._votes.values()
            if v.votable_type == votable_type and v.votable_id == votable_id
        ]

    async def find_by_votables(
        self,
        votable_type: VotableType,
        votable_ids: Sequence[UUID],
    ) -> list[Vote]:
        """Find all votes on multiple items (batch query)."""
        wanted = set(votable_ids)
        return [
            v
            for v in self._votes.values()
            if v.votable_type == votable_type and v.votable_id in wanted
        ]

    async def find_by_user_and_votables(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_ids: Sequence[UUID],
    ) -> list[Vote]:
        """Find a user's votes on multiple items (batch query)."""
        wanted = set(votable_ids)
        return [
            v
            for v in self._votes.values()
            if v.user_id == user_id
            and v.votable_type == votable_type
            and v.votable_id in wanted
        ]

    async def save(self, vote: Vote) -> Vote:
        """Save a vote.

        Raises:
            IntegrityError: If vote already exists (duplicate)
        """
        existing = await self.find_by_user_and_votable(
            vote.user_id, vote.votable_type, vote.votable_id
        )
        if existing:
            raise IntegrityError("Duplicate vote", None, Exception("unique_vote"))

        self._votes[vote.id] = vote
        return vote

    async def update_value(self, vote_id: VoteId, value: int) -> Optional[Vote]:
        """Change the value of an existing vote."""
        vote = self._votes.get(vote_id)
        if vote is None:
            return None
        updated = vote.model_copy(update={"value": value, "updated_at": utc_now()})
        self._votes[vote_id] = updated
        return updated

    async def delete(self, vote_id: VoteId) -> bool:
        """Delete a vote by ID."""
        return self._votes.pop(vote_id, None) is not None
