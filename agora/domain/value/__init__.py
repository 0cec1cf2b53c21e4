"""Domain value objects for Agora."""

from agora.domain.value.identifiers import (
    CommentId,
    FriendshipId,
    GroupId,
    PostId,
    UserId,
    VoteId,
)
from agora.domain.value.types import (
    FeedKind,
    FeedPeriod,
    FeedSpec,
    VotableType,
    VoteTarget,
)

__all__ = [
    # Identifiers
    "UserId",
    "PostId",
    "CommentId",
    "VoteId",
    "GroupId",
    "FriendshipId",
    # Types
    "VotableType",
    "VoteTarget",
    "FeedKind",
    "FeedPeriod",
    "FeedSpec",
]
