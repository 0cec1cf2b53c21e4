"""In-memory post repository for testing."""

from typing import Optional

from agora.domain.model.post import Post
from agora.domain.repository.post import PostFilter, PostRepository, PostSort
from agora.domain.value import PostId


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self) -> None:
        self._posts: dict[PostId, Post] = {}

    def _matching(self, post_filter: PostFilter) -> list[Post]:
        posts = list(self._posts.values())
        if post_filter.author_ids is not None:
            posts = [p for p in posts if p.author_id in post_filter.author_ids]
        if post_filter.group_id is not None:
            posts = [p for p in posts if p.group_id == post_filter.group_id]
        if post_filter.created_after is not None:
            posts = [p for p in posts if p.created_at >= post_filter.created_after]
        if post_filter.query:
            needle = post_filter.query.lower()
            posts = [
                p
                for p in posts
                if needle in p.title.lower() or needle in (p.content or "").lower()
            ]
        return posts

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        return self._posts.get(post_id)

    async def find_posts(
        self,
        post_filter: PostFilter,
        sort: PostSort = PostSort.RECENT,
        offset: int = 0,
        limit: int = 25,
    ) -> tuple[list[Post], int]:
        """Find one page of posts in ``sort`` order."""
        posts = self._matching(post_filter)
        posts.sort(key=lambda p: p.id)
        posts.sort(key=lambda p: p.created_at, reverse=sort is PostSort.RECENT)
        return posts[offset : offset + limit], len(posts)

    async def find_all(self, post_filter: PostFilter) -> list[Post]:
        """Find every post matching the filter."""
        return self._matching(post_filter)

    async def save(self, post: Post) -> Post:
        """Insert a post."""
        self._posts[post.id] = post
        return post
