"""Create post use case."""

from datetime import datetime

from pydantic import BaseModel, Field

from agora.application.usecase.base import BaseUseCase, parse_optional_uuid, parse_uuid
from agora.domain.service import PostService
from agora.domain.value import GroupId, UserId


class CreatePostRequest(BaseModel):
    """Create post request."""

    author_id: str  # User ID from the authenticated caller
    title: str = Field(min_length=1, max_length=300)
    content: str | None = Field(default=None, max_length=40000)
    group_id: str | None = None


class CreatePostResponse(BaseModel):
    """Create post response."""

    post_id: str
    title: str
    content: str | None
    author_id: str
    group_id: str | None
    created_at: datetime


class CreatePostUseCase(BaseUseCase):
    """Use case for creating a post."""

    def __init__(self, post_service: PostService) -> None:
        self.post_service = post_service

    async def execute(self, request: CreatePostRequest) -> CreatePostResponse:
        group_id = parse_optional_uuid(request.group_id, "group_id")
        post = await self.post_service.create_post(
            author_id=UserId(parse_uuid(request.author_id, "author_id")),
            title=request.title,
            content=request.content,
            group_id=GroupId(group_id) if group_id else None,
        )

        return CreatePostResponse(
            post_id=str(post.id),
            title=post.title,
            content=post.content,
            author_id=str(post.author_id),
            group_id=str(post.group_id) if post.group_id else None,
            created_at=post.created_at,
        )
