"""Unit tests for FriendshipService."""

from uuid import uuid4

import pytest

from agora.domain.error import ConflictError, InvalidInputError, NotFoundError
from agora.domain.model.friendship import Friendship
from agora.domain.repository import FriendshipRepository
from agora.domain.service import FriendshipService
from agora.domain.value import FriendshipId, UserId
from agora.persistence.repository.inmemory import InMemoryFriendshipRepository
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


class RacingFriendshipRepository(InMemoryFriendshipRepository):
    """Sees no link on the check, then loses the insert to a concurrent one."""

    async def are_friends(self, user_id, other_id):
        return False

    async def save(self, friendship):
        await super().save(friendship)
        return await super().save(friendship)


class TestAddFriend:
    @pytest.mark.asyncio
    async def test_add_friend_links_both_ways(self, unit_env):
        # Arrange
        friendship_service = await unit_env.get(FriendshipService)
        friendship_repo = await unit_env.get(FriendshipRepository)
        alice, bob = UserId(uuid4()), UserId(uuid4())

        # Act
        friendship = await friendship_service.add_friend(alice, bob)

        # Assert
        assert friendship.user_id == alice
        assert friendship.friend_id == bob
        assert await friendship_repo.find_friend_ids(bob) == {alice}
        assert await friendship_service.are_friends(bob, alice)

    @pytest.mark.asyncio
    async def test_adding_twice_conflicts(self, unit_env):
        friendship_service = await unit_env.get(FriendshipService)
        alice, bob = UserId(uuid4()), UserId(uuid4())
        await friendship_service.add_friend(alice, bob)

        with pytest.raises(ConflictError):
            await friendship_service.add_friend(alice, bob)

    @pytest.mark.asyncio
    async def test_adding_back_conflicts(self, unit_env):
        """Bob adding Alice after Alice added Bob is not a second link."""
        friendship_service = await unit_env.get(FriendshipService)
        friendship_repo = await unit_env.get(FriendshipRepository)
        alice, bob = UserId(uuid4()), UserId(uuid4())
        await friendship_service.add_friend(alice, bob)

        with pytest.raises(ConflictError):
            await friendship_service.add_friend(bob, alice)

        assert await friendship_repo.find_friend_ids(alice) == {bob}

    @pytest.mark.asyncio
    async def test_befriend_self(self, unit_env):
        friendship_service = await unit_env.get(FriendshipService)
        alice = UserId(uuid4())

        with pytest.raises(InvalidInputError):
            await friendship_service.add_friend(alice, alice)

    @pytest.mark.asyncio
    async def test_concurrent_insert_conflicts(self):
        friendship_service = FriendshipService(
            friendship_repository=RacingFriendshipRepository()
        )

        with pytest.raises(ConflictError):
            await friendship_service.add_friend(UserId(uuid4()), UserId(uuid4()))


class TestRemoveFriend:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("removed_by_adder", [True, False])
    async def test_either_side_can_remove(self, unit_env, removed_by_adder):
        # Arrange
        friendship_service = await unit_env.get(FriendshipService)
        friendship_repo = await unit_env.get(FriendshipRepository)
        alice, bob = UserId(uuid4()), UserId(uuid4())
        await friendship_repo.save(
            Friendship(id=FriendshipId(uuid4()), user_id=alice, friend_id=bob)
        )
        user_id, friend_id = (alice, bob) if removed_by_adder else (bob, alice)

        # Act
        await friendship_service.remove_friend(user_id, friend_id)

        # Assert
        assert not await friendship_service.are_friends(alice, bob)
        assert await friendship_repo.find_friend_ids(alice) == set()

    @pytest.mark.asyncio
    async def test_remove_stranger(self, unit_env):
        friendship_service = await unit_env.get(FriendshipService)

        with pytest.raises(NotFoundError, match="Friendship"):
            await friendship_service.remove_friend(UserId(uuid4()), UserId(uuid4()))

    @pytest.mark.asyncio
    async def test_readd_after_remove(self, unit_env):
        friendship_service = await unit_env.get(FriendshipService)
        alice, bob = UserId(uuid4()), UserId(uuid4())
        await friendship_service.add_friend(alice, bob)
        await friendship_service.remove_friend(bob, alice)

        await friendship_service.add_friend(bob, alice)

        assert await friendship_service.are_friends(alice, bob)
