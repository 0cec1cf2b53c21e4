"""Repository interfaces for the Agora domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from agora.domain.repository.comment import CommentOrder, CommentRepository
from agora.domain.repository.feed_cursor import FeedCursorRepository
from agora.domain.repository.friendship import FriendshipRepository
from agora.domain.repository.post import PostFilter, PostRepository, PostSort
from agora.domain.repository.vote import VoteRepository

__all__ = [
    "PostRepository",
    "PostFilter",
    "PostSort",
    "CommentRepository",
    "CommentOrder",
    "VoteRepository",
    "FriendshipRepository",
    "FeedCursorRepository",
]
