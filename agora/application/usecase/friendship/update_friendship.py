"""Add or remove a friend."""

from enum import Enum

from pydantic import BaseModel

from agora.application.usecase.base import BaseUseCase, parse_uuid
from agora.domain.service import FriendshipService
from agora.domain.value import UserId


class FriendAction(str, Enum):
    ADD = "add"
    REMOVE = "remove"


class UpdateFriendshipRequest(BaseModel):
    """Update friendship request."""

    user_id: str  # User ID from the authenticated caller
    friend_id: str
    action: FriendAction


class UpdateFriendshipResponse(BaseModel):
    """Update friendship response."""

    user_id: str
    friend_id: str
    friends: bool


class UpdateFriendshipUseCase(BaseUseCase):
    """Use case for adding or removing a friend."""

    def __init__(self, friendship_service: FriendshipService) -> None:
        self.friendship_service = friendship_service

    async def execute(
        self, request: UpdateFriendshipRequest
    ) -> UpdateFriendshipResponse:
        user_id = UserId(parse_uuid(request.user_id, "user_id"))
        friend_id = UserId(parse_uuid(request.friend_id, "friend_id"))

        if request.action is FriendAction.ADD:
            await self.friendship_service.add_friend(user_id, friend_id)
        else:
            await self.friendship_service.remove_friend(user_id, friend_id)

        return UpdateFriendshipResponse(
            user_id=str(user_id),
            friend_id=str(friend_id),
            friends=request.action is FriendAction.ADD,
        )
