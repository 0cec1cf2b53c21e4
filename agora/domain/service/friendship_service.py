"""Friendship domain service."""

from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from agora.domain.error import ConflictError, InvalidInputError, NotFoundError
from agora.domain.model.friendship import Friendship
from agora.domain.repository import FriendshipRepository
from agora.domain.value import FriendshipId, UserId

from .base import Service, storage_errors


class FriendshipService(Service):
    """Adds and removes friendship links.

    A link is symmetric, so every check looks at both directions: once
    Alice has added Bob, Bob adding Alice is a conflict and either of
    them can remove the link.
    """

    def __init__(self, friendship_repository: FriendshipRepository) -> None:
        self.friendship_repository = friendship_repository

    async def add_friend(self, user_id: UserId, friend_id: UserId) -> Friendship:
        """Link two users.

        Raises:
            InvalidInputError: If both ids are the same user
            ConflictError: If the users are already friends
            StorageError: On persistence failure
        """
        if user_id == friend_id:
            raise InvalidInputError("A user cannot be their own friend")

        with logfire.span(
            "friendship_service.add_friend",
            user_id=str(user_id),
            friend_id=str(friend_id),
        ):
            with storage_errors("add_friend"):
                if await self.friendship_repository.are_friends(user_id, friend_id):
                    raise ConflictError("Users are already friends")

                friendship = Friendship(
                    id=FriendshipId(uuid4()), user_id=user_id, friend_id=friend_id
                )
                try:
                    saved = await self.friendship_repository.save(friendship)
                except IntegrityError as e:
                    logfire.warn(
                        "Concurrent friendship insert",
                        user_id=str(user_id),
                        friend_id=str(friend_id),
                    )
                    raise ConflictError("Users are already friends") from e

            logfire.info(
                "Friend added", user_id=str(user_id), friend_id=str(friend_id)
            )
            return saved

    async def remove_friend(self, user_id: UserId, friend_id: UserId) -> None:
        """Unlink two users, whoever added whom.

        Raises:
            NotFoundError: If the users are not friends
            StorageError: On persistence failure
        """
        with logfire.span(
            "friendship_service.remove_friend",
            user_id=str(user_id),
            friend_id=str(friend_id),
        ):
            with storage_errors("remove_friend"):
                removed = await self.friendship_repository.delete_link(
                    user_id, friend_id
                )
            if not removed:
                raise NotFoundError("Friendship", f"{user_id}/{friend_id}")
            logfire.info(
                "Friend removed", user_id=str(user_id), friend_id=str(friend_id)
            )

    async def are_friends(self, user_id: UserId, other_id: UserId) -> bool:
        with storage_errors("are_friends"):
            return await self.friendship_repository.are_friends(user_id, other_id)
