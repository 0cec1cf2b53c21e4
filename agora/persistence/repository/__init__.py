"""PostgreSQL repository implementations."""

from agora.persistence.repository.comment import PostgresCommentRepository
from agora.persistence.repository.feed_cursor import PostgresFeedCursorRepository
from agora.persistence.repository.friendship import PostgresFriendshipRepository
from agora.persistence.repository.post import PostgresPostRepository
from agora.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresPostRepository",
    "PostgresCommentRepository",
    "PostgresVoteRepository",
    "PostgresFriendshipRepository",
    "PostgresFeedCursorRepository",
]
