"""Post routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, status
from pydantic import BaseModel, Field

from agora.application.usecase.post import (
    CreatePostRequest,
    CreatePostResponse,
    CreatePostUseCase,
)
from agora.interface.api.identity import require_user_id

router = APIRouter(prefix="/posts", tags=["posts"], route_class=DishkaRoute)


class CreatePostAPIRequest(BaseModel):
    """API request for creating a post."""

    title: str = Field(min_length=1, max_length=300)
    content: str | None = Field(default=None, max_length=40000)
    group_id: str | None = None


@router.post("", response_model=CreatePostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    request: CreatePostAPIRequest,
    create_post_use_case: FromDishka[CreatePostUseCase],
    x_user_id: str | None = Header(default=None),
) -> CreatePostResponse:
    """Create a new post, optionally inside a group.

    Requires authentication.
    """
    user_id = require_user_id(x_user_id, "create posts")

    return await create_post_use_case.execute(
        CreatePostRequest(
            author_id=user_id,
            title=request.title,
            content=request.content,
            group_id=request.group_id,
        )
    )
