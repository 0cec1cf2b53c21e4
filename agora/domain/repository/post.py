"""Post repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple

from agora.domain.model.post import Post
from agora.domain.value import GroupId, PostId, UserId
from agora.domain.value.common import ValueObject


class PostFilter(ValueObject):
    """Criteria for post listings. Unset fields do not filter."""

    author_ids: Optional[frozenset[UserId]] = None
    group_id: Optional[GroupId] = None
    created_after: Optional[datetime] = None  # inclusive
    query: Optional[str] = None  # case-insensitive substring of title or content


class PostSort(str, Enum):
    """Orderings for post pages. Ties on created_at are broken by id."""

    RECENT = "recent"  # newest first
    OLDEST = "oldest"


class PostRepository(ABC):
    """Repository for Post aggregate.

    Defines the contract for post persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_posts(
        self,
        post_filter: PostFilter,
        sort: PostSort = PostSort.RECENT,
        offset: int = 0,
        limit: int = 25,
    ) -> Tuple[List[Post], int]:
        """Find one page of posts.

        Args:
            post_filter: Criteria posts must match
            sort: Page ordering; ties on created_at are broken by id so
                pages are stable
            offset: Number of posts to skip
            limit: Maximum number of posts to return

        Returns:
            The page of posts and the total number matching the filter
        """
        pass

    @abstractmethod
    async def find_all(self, post_filter: PostFilter) -> List[Post]:
        """Find every post matching the filter, in no particular order."""
        pass

    @abstractmethod
    async def save(self, post: Post) -> Post:
        """Insert a post.

        Args:
            post: The post to save

        Returns:
            The saved post
        """
        pass
