"""Friendship entity."""

from datetime import datetime

from pydantic import Field, model_validator

from agora.domain.model.common import DomainModel, utc_now
from agora.domain.value import FriendshipId, UserId


class Friendship(DomainModel):
    """A friendship link between two users.

    A single row makes both users friends of each other; the direction
    only records who added whom.
    """

    id: FriendshipId
    user_id: UserId
    friend_id: UserId
    created_at: datetime = Field(default_factory=utc_now)

    @model_validator(mode="after")
    def validate_distinct_users(self) -> "Friendship":
        """A user cannot befriend themselves."""
        if self.user_id == self.friend_id:
            raise ValueError("A user cannot be their own friend")
        return self

    def other(self, user_id: UserId) -> UserId:
        """Return the member of the link that is not ``user_id``."""
        return self.friend_id if self.user_id == user_id else self.user_id
