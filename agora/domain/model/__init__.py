"""Domain model entities for Agora."""

from agora.domain.model.comment import Comment
from agora.domain.model.feed import FeedCursor
from agora.domain.model.friendship import Friendship
from agora.domain.model.post import Post
from agora.domain.model.vote import VOTE_VALUES, Vote, tally

__all__ = [
    "Post",
    "Comment",
    "Vote",
    "Friendship",
    "FeedCursor",
    "VOTE_VALUES",
    "tally",
]
