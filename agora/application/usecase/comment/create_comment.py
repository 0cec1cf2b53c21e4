"""Create comment use case."""

from datetime import datetime

from pydantic import BaseModel, Field

from agora.application.usecase.base import BaseUseCase, parse_optional_uuid, parse_uuid
from agora.domain.service import CommentService
from agora.domain.value import CommentId, PostId, UserId


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    post_id: str  # UUID string
    author_id: str  # User ID from the authenticated caller
    content: str = Field(min_length=1, max_length=10000)
    parent_id: str | None = None  # Parent comment ID for replies


class CreateCommentResponse(BaseModel):
    """Create comment response."""

    comment_id: str
    post_id: str
    author_id: str
    content: str
    parent_id: str | None
    created_at: datetime


class CreateCommentUseCase(BaseUseCase):
    """Use case for commenting on a post or replying to a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Raises:
            NotFoundError: If the post does not exist
            ParentNotFoundError: If the parent comment does not exist
            InvalidInputError: If the parent belongs to another post
        """
        parent_id = parse_optional_uuid(request.parent_id, "parent_id")
        comment = await self.comment_service.create_comment(
            post_id=PostId(parse_uuid(request.post_id, "post_id")),
            author_id=UserId(parse_uuid(request.author_id, "author_id")),
            content=request.content,
            parent_id=CommentId(parent_id) if parent_id else None,
        )

        return CreateCommentResponse(
            comment_id=str(comment.id),
            post_id=str(comment.post_id),
            author_id=str(comment.author_id),
            content=comment.content,
            parent_id=str(comment.parent_id) if comment.parent_id else None,
            created_at=comment.created_at,
        )
