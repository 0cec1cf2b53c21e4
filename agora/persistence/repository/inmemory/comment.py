"""In-memory comment repository for testing."""

from collections import Counter
from typing import Optional, Sequence

from agora.domain.model.comment import Comment
from agora.domain.repository.comment import CommentOrder, CommentRepository
from agora.domain.value import CommentId, PostId


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_by_post(
        self,
        post_id: PostId,
        order: CommentOrder = CommentOrder.NEWEST,
    ) -> list[Comment]:
        """Find every comment on a post."""
        comments = [c for c in self._comments.values() if c.post_id == post_id]
        comments.sort(key=lambda c: c.id)
        comments.sort(key=lambda c: c.created_at, reverse=order == CommentOrder.NEWEST)
        return comments

    async def save(self, comment: Comment) -> Comment:
        """Insert a comment."""
        self._comments[comment.id] = comment
        return comment

    async def count_by_posts(self, post_ids: Sequence[PostId]) -> dict[PostId, int]:
        """Count comments for several posts."""
        wanted = set(post_ids)
        counts = Counter(
            c.post_id for c in self._comments.values() if c.post_id in wanted
        )
        return dict(counts)
