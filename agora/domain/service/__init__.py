"""Domain services."""

from .base import Service, storage_errors
from .comment_service import CommentService
from .comment_tree import CommentNode, CommentTree
from .feed_service import FeedItem, FeedPage, FeedService
from .friendship_service import FriendshipService
from .post_service import PostService
from .ranking import RankedPost, rank_by_popularity
from .vote_service import VoteOutcome, VoteService, validate_vote_value

__all__ = [
    "Service",
    "storage_errors",
    "CommentService",
    "CommentNode",
    "CommentTree",
    "FeedItem",
    "FeedPage",
    "FeedService",
    "FriendshipService",
    "PostService",
    "RankedPost",
    "rank_by_popularity",
    "VoteOutcome",
    "VoteService",
    "validate_vote_value",
]
