"""Vote entity.

Votes are the ledger behind every score. Each user holds at most one vote
per item (post or comment); a vote is either +1 or -1. "No vote" is the
absence of a row, never a stored zero.
"""

from datetime import datetime
from typing import Iterable
from uuid import UUID

from pydantic import Field, field_validator

from agora.domain.model.common import DomainModel, utc_now
from agora.domain.value import UserId, VotableType, VoteId

VOTE_VALUES = frozenset({-1, 0, 1})


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - One vote per user per item (enforced by database unique constraint)
    - Stored value is +1 or -1
    - Polymorphic reference to votable (post or comment)
    """

    id: VoteId
    user_id: UserId
    votable_type: VotableType
    votable_id: UUID  # PostId or CommentId (both are UUIDs)
    value: int
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @field_validator("value")
    @classmethod
    def validate_value(cls, v: int) -> int:
        """Only +1 and -1 are persisted."""
        if v not in (-1, 1):
            raise ValueError("Stored vote value must be -1 or 1")
        return v


def tally(votes: Iterable[Vote]) -> int:
    """Score of an item: the sum of its vote values.

    The single scoring rule shared by the ledger and the popular feed.
    """
    return sum(vote.value for vote in votes)
