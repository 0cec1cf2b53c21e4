"""Friendship use cases."""

from .update_friendship import (
    FriendAction,
    UpdateFriendshipRequest,
    UpdateFriendshipResponse,
    UpdateFriendshipUseCase,
)

__all__ = [
    "FriendAction",
    "UpdateFriendshipRequest",
    "UpdateFriendshipResponse",
    "UpdateFriendshipUseCase",
]
