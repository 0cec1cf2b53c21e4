"""Comment domain service."""

from typing import Optional, Sequence
from uuid import uuid4

import logfire

from agora.config import CommentSettings
from agora.domain.error import InvalidInputError, NotFoundError, ParentNotFoundError
from agora.domain.model.comment import Comment
from agora.domain.model.common import utc_now
from agora.domain.repository import CommentOrder, CommentRepository
from agora.domain.value import CommentId, PostId, UserId

from .base import Service, storage_errors
from .post_service import PostService


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        post_service: PostService,
        comment_settings: CommentSettings,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            post_service: Post domain service, for existence checks
            comment_settings: Default thread ordering
        """
        self.comment_repository = comment_repository
        self.post_service = post_service
        self.comment_settings = comment_settings

    async def create_comment(
        self,
        post_id: PostId,
        author_id: UserId,
        content: str,
        parent_id: CommentId | None = None,
    ) -> Comment:
        """Create a comment on a post or reply to another comment.

        Args:
            post_id: Post ID
            author_id: Author user ID
            content: Comment text
            parent_id: Parent comment ID for replies (None for top-level)

        Returns:
            Created comment

        Raises:
            NotFoundError: If the post does not exist
            ParentNotFoundError: If the parent comment does not exist
            InvalidInputError: If the parent belongs to another post
        """
        with logfire.span(
            "comment_service.create_comment",
            post_id=str(post_id),
            author_id=str(author_id),
            parent_id=str(parent_id) if parent_id else None,
        ):
            post = await self.post_service.get_post_by_id(post_id)
            if not post:
                raise NotFoundError("Post", str(post_id))

            with storage_errors("create_comment"):
                if parent_id:
                    parent = await self.comment_repository.find_by_id(parent_id)
                    if not parent:
                        logfire.error(
                            "Parent comment not found",
                            parent_id=str(parent_id),
                            post_id=str(post_id),
                        )
                        raise ParentNotFoundError(str(parent_id))
                    if parent.post_id != post_id:
                        logfire.error(
                            "Parent comment does not belong to post",
                            parent_id=str(parent_id),
                            parent_post_id=str(parent.post_id),
                            target_post_id=str(post_id),
                        )
                        raise InvalidInputError(
                            "Parent comment does not belong to this post"
                        )

                comment = Comment(
                    id=CommentId(uuid4()),
                    post_id=post_id,
                    author_id=author_id,
                    content=content,
                    parent_id=parent_id,
                    created_at=utc_now(),
                )
                saved = await self.comment_repository.save(comment)

            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                post_id=str(post_id),
                is_reply=parent_id is not None,
            )
            return saved

    async def get_comments_for_post(
        self, post_id: PostId, order: Optional[CommentOrder] = None
    ) -> list[Comment]:
        """Get all comments for a post as a flat list.

        Args:
            post_id: Post ID
            order: Sibling order; defaults to the configured order

        Returns:
            Comments sorted by creation time
        """
        order = order or self.comment_settings.order
        with logfire.span(
            "comment_service.get_comments_for_post",
            post_id=str(post_id),
            order=order.value,
        ):
            with storage_errors("get_comments"):
                comments = await self.comment_repository.find_by_post(
                    post_id=post_id, order=order
                )
            logfire.info(
                "Comments retrieved for post",
                post_id=str(post_id),
                count=len(comments),
            )
            return comments

    async def get_comment_by_id(self, comment_id: CommentId) -> Comment | None:
        """Get a comment by ID.

        Returns:
            Comment if found, None otherwise
        """
        with logfire.span(
            "comment_service.get_comment_by_id", comment_id=str(comment_id)
        ):
            with storage_errors("get_comment"):
                comment = await self.comment_repository.find_by_id(comment_id)
            if not comment:
                logfire.warn("Comment not found", comment_id=str(comment_id))
            return comment

    async def count_by_posts(self, post_ids: Sequence[PostId]) -> dict[PostId, int]:
        """Comment counts for several posts; posts without comments map to 0."""
        if not post_ids:
            return {}
        with storage_errors("count_comments"):
            counts = await self.comment_repository.count_by_posts(post_ids)
        return {pid: counts.get(pid, 0) for pid in post_ids}
