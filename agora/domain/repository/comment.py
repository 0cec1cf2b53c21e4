"""Comment repository interface."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, List, Optional, Sequence

from agora.domain.model.comment import Comment
from agora.domain.value import CommentId, PostId


class CommentOrder(str, Enum):
    """Order of comments fetched for a post.

    The tree builder keeps this order among siblings.
    """

    NEWEST = "newest"  # created_at DESC
    OLDEST = "oldest"  # created_at ASC


class CommentRepository(ABC):
    """Repository for Comment entity."""

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        pass

    @abstractmethod
    async def find_by_post(
        self,
        post_id: PostId,
        order: CommentOrder = CommentOrder.NEWEST,
    ) -> List[Comment]:
        """Find every comment on a post as a flat list.

        Args:
            post_id: Post ID
            order: Creation-time order; ties are broken by id

        Returns:
            All comments of the post
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Insert a comment."""
        pass

    @abstractmethod
    async def count_by_posts(self, post_ids: Sequence[PostId]) -> Dict[PostId, int]:
        """Count comments for several posts in one query.

        Posts without comments are absent from the result.
        """
        pass
