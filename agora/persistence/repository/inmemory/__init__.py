"""In-memory repository implementations for testing."""

from .comment import InMemoryCommentRepository
from .feed_cursor import InMemoryFeedCursorRepository
from .friendship import InMemoryFriendshipRepository
from .post import InMemoryPostRepository
from .vote import InMemoryVoteRepository

__all__ = [
    "InMemoryCommentRepository",
    "InMemoryFeedCursorRepository",
    "InMemoryFriendshipRepository",
    "InMemoryPostRepository",
    "InMemoryVoteRepository",
]
