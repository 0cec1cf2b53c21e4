"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from agora.domain.model import Comment, FeedCursor, Friendship, Post, Vote
from agora.domain.value import (
    CommentId,
    FriendshipId,
    GroupId,
    PostId,
    UserId,
    VotableType,
    VoteId,
)


def _uuid(value: Any) -> UUID:
    """asyncpg returns UUID objects, raw SQL paths may return strings."""
    return UUID(value) if isinstance(value, str) else value


def row_to_post(row: Dict[str, Any]) -> Post:
    """Convert database row to Post domain model."""
    return Post(
        id=PostId(_uuid(row["id"])),
        title=row["title"],
        content=row.get("content"),
        author_id=UserId(_uuid(row["author_id"])),
        group_id=GroupId(_uuid(row["group_id"])) if row.get("group_id") else None,
        created_at=row["created_at"],
    )


def post_to_dict(post: Post) -> Dict[str, Any]:
    """Convert Post domain model to database dict."""
    return post.model_dump()


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model."""
    return Comment(
        id=CommentId(_uuid(row["id"])),
        post_id=PostId(_uuid(row["post_id"])),
        author_id=UserId(_uuid(row["author_id"])),
        content=row["content"],
        parent_id=CommentId(_uuid(row["parent_id"])) if row.get("parent_id") else None,
        created_at=row["created_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict."""
    return comment.model_dump()


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model."""
    return Vote(
        id=VoteId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        votable_type=VotableType(row["votable_type"]),
        votable_id=_uuid(row["votable_id"]),
        value=row["value"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def vote_to_dict(vote: Vote) -> Dict[str, Any]:
    """Convert Vote domain model to database dict.

    The enum column takes the plain string value.
    """
    data = vote.model_dump()
    data["votable_type"] = vote.votable_type.value
    return data


def row_to_friendship(row: Dict[str, Any]) -> Friendship:
    """Convert database row to Friendship domain model."""
    return Friendship(
        id=FriendshipId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        friend_id=UserId(_uuid(row["friend_id"])),
        created_at=row["created_at"],
    )


def friendship_to_dict(friendship: Friendship) -> Dict[str, Any]:
    """Convert Friendship domain model to database dict."""
    return friendship.model_dump()


def row_to_feed_cursor(row: Dict[str, Any]) -> FeedCursor:
    """Convert database row to FeedCursor domain model."""
    return FeedCursor(
        session_id=row["session_id"],
        feed_key=row["feed_key"],
        next_page=row["next_page"],
        seen_ids=frozenset(_uuid(item) for item in row["seen_ids"] or ()),
        updated_at=row["updated_at"],
    )


def feed_cursor_to_dict(cursor: FeedCursor) -> Dict[str, Any]:
    """Convert FeedCursor domain model to database dict.

    The array column is written in a stable order.
    """
    data = cursor.model_dump()
    data["seen_ids"] = sorted(cursor.seen_ids)
    return data
