"""Friendship routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header
from pydantic import BaseModel

from agora.application.usecase.friendship import (
    FriendAction,
    UpdateFriendshipRequest,
    UpdateFriendshipResponse,
    UpdateFriendshipUseCase,
)
from agora.interface.api.identity import require_user_id

router = APIRouter(prefix="/users", tags=["friends"], route_class=DishkaRoute)


class UpdateFriendshipAPIRequest(BaseModel):
    """API request for adding or removing a friend."""

    action: FriendAction


@router.post("/{user_id}/friend", response_model=UpdateFriendshipResponse)
async def update_friendship(
    user_id: str,
    request: UpdateFriendshipAPIRequest,
    update_friendship_use_case: FromDishka[UpdateFriendshipUseCase],
    x_user_id: str | None = Header(default=None),
) -> UpdateFriendshipResponse:
    """Add ``user_id`` as a friend of the caller, or remove them.

    Requires authentication. Adding an existing friend is a 409 and
    removing someone who is not a friend is a 404.
    """
    caller_id = require_user_id(x_user_id, "manage friends")

    return await update_friendship_use_case.execute(
        UpdateFriendshipRequest(
            user_id=caller_id, friend_id=user_id, action=request.action
        )
    )
