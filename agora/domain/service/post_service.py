"""Post domain service."""

from typing import Optional
from uuid import uuid4

import logfire

from agora.domain.model.common import utc_now
from agora.domain.model.post import Post
from agora.domain.repository import PostRepository
from agora.domain.value import GroupId, PostId, UserId

from .base import Service, storage_errors


class PostService(Service):
    """Domain service for post operations."""

    def __init__(self, post_repository: PostRepository) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
        """
        self.post_repository = post_repository

    async def create_post(
        self,
        author_id: UserId,
        title: str,
        content: Optional[str] = None,
        group_id: Optional[GroupId] = None,
    ) -> Post:
        """Create a new post.

        Args:
            author_id: Author user ID
            title: Post title
            content: Optional body text
            group_id: Group the post belongs to, if any

        Returns:
            Created post
        """
        with logfire.span(
            "post_service.create_post",
            author_id=str(author_id),
            group_id=str(group_id) if group_id else None,
        ):
            post = Post(
                id=PostId(uuid4()),
                title=title,
                content=content,
                author_id=author_id,
                group_id=group_id,
                created_at=utc_now(),
            )
            with storage_errors("create_post"):
                saved = await self.post_repository.save(post)
            logfire.info("Post created", post_id=str(saved.id))
            return saved

    async def get_post_by_id(self, post_id: PostId) -> Post | None:
        """Get a post by ID.

        Returns:
            Post if found, None otherwise
        """
        with logfire.span("post_service.get_post_by_id", post_id=str(post_id)):
            with storage_errors("get_post"):
                post = await self.post_repository.find_by_id(post_id)
            if not post:
                logfire.warn("Post not found", post_id=str(post_id))
            return post
