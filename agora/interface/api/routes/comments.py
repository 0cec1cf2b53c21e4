"""Comment routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, status
from pydantic import BaseModel, Field

from agora.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    GetCommentsRequest,
    GetCommentsResponse,
    GetCommentsUseCase,
)
from agora.domain.repository.comment import CommentOrder
from agora.interface.api.identity import require_user_id

router = APIRouter(prefix="/posts", tags=["comments"], route_class=DishkaRoute)


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment."""

    content: str = Field(min_length=1, max_length=10000)
    parent_id: str | None = None  # Parent comment ID for replies


@router.post(
    "/{post_id}/comments",
    response_model=CreateCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    post_id: str,
    request: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    x_user_id: str | None = Header(default=None),
) -> CreateCommentResponse:
    """Create a comment on a post or reply to another comment.

    Requires authentication.

    Args:
        post_id: Post UUID
        request: Comment creation data
        create_comment_use_case: Create comment use case from DI
        x_user_id: Authenticated user forwarded by the gateway

    Returns:
        Created comment details
    """
    user_id = require_user_id(x_user_id, "create comments")

    return await create_comment_use_case.execute(
        CreateCommentRequest(
            post_id=post_id,
            author_id=user_id,
            content=request.content,
            parent_id=request.parent_id,
        )
    )


@router.get("/{post_id}/comments", response_model=GetCommentsResponse)
async def get_comments(
    post_id: str,
    get_comments_use_case: FromDishka[GetCommentsUseCase],
    order: CommentOrder | None = None,
    x_user_id: str | None = Header(default=None),
) -> GetCommentsResponse:
    """Get the comment thread of a post as a nested tree.

    If a user is forwarded, each comment carries that user's vote.

    Args:
        post_id: Post UUID
        get_comments_use_case: Get comments use case from DI
        order: Sibling order, newest or oldest first
        x_user_id: Authenticated user forwarded by the gateway (optional)

    Returns:
        Root comments with nested replies, scores and vote state
    """
    return await get_comments_use_case.execute(
        GetCommentsRequest(post_id=post_id, user_id=x_user_id, order=order)
    )
