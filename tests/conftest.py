"""Test configuration and shared factories."""

from datetime import datetime, timedelta
from uuid import uuid4

from agora.domain.model.comment import Comment
from agora.domain.model.common import utc_now
from agora.domain.model.post import Post
from agora.domain.model.vote import Vote
from agora.domain.value import (
    CommentId,
    GroupId,
    PostId,
    UserId,
    VotableType,
    VoteId,
)


def make_post(
    post_id: PostId | None = None,
    author_id: UserId | None = None,
    group_id: GroupId | None = None,
    created_at: datetime | None = None,
    age: timedelta | None = None,
    title: str = "Test Post",
    content: str = "Test content",
) -> Post:
    """Build a post; ``age`` places created_at that far in the past."""
    if created_at is None:
        created_at = utc_now() - (age or timedelta(0))
    return Post(
        id=post_id or PostId(uuid4()),
        title=title,
        content=content,
        author_id=author_id or UserId(uuid4()),
        group_id=group_id,
        created_at=created_at,
    )


def make_comment(
    post_id: PostId,
    parent_id: CommentId | None = None,
    comment_id: CommentId | None = None,
    created_at: datetime | None = None,
    content: str = "Test comment",
) -> Comment:
    return Comment(
        id=comment_id or CommentId(uuid4()),
        post_id=post_id,
        author_id=UserId(uuid4()),
        content=content,
        parent_id=parent_id,
        created_at=created_at or utc_now(),
    )


def make_vote(
    votable_id,
    value: int,
    votable_type: VotableType = VotableType.POST,
    user_id: UserId | None = None,
) -> Vote:
    return Vote(
        id=VoteId(uuid4()),
        user_id=user_id or UserId(uuid4()),
        votable_type=votable_type,
        votable_id=votable_id,
        value=value,
    )
