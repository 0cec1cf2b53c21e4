"""In-memory friendship repository for testing."""

from sqlalchemy.exc import IntegrityError

from agora.domain.model.friendship import Friendship
from agora.domain.repository.friendship import FriendshipRepository
from agora.domain.value import UserId


class InMemoryFriendshipRepository(FriendshipRepository):
    """In-memory implementation of FriendshipRepository for testing."""

    def __init__(self) -> None:
        self._friendships: list[Friendship] = []

    async def find_friend_ids(self, user_id: UserId) -> set[UserId]:
        """Find every user linked to ``user_id`` in either direction."""
        return {
            f.other(user_id)
            for f in self._friendships
            if user_id in (f.user_id, f.friend_id)
        }

    async def are_friends(self, user_id: UserId, other_id: UserId) -> bool:
        """Check whether a link exists in either direction."""
        return other_id in await self.find_friend_ids(user_id)

    async def save(self, friendship: Friendship) -> Friendship:
        """Insert a friendship."""
        for f in self._friendships:
            if f.user_id == friendship.user_id and f.friend_id == friendship.friend_id:
                raise IntegrityError(
                    "Duplicate friendship", None, Exception("unique_friendship")
                )
        self._friendships.append(friendship)
        return friendship

    async def delete_link(self, user_id: UserId, other_id: UserId) -> bool:
        """Remove the link between two users in either direction."""
        pair = {user_id, other_id}
        kept = [f for f in self._friendships if {f.user_id, f.friend_id} != pair]
        removed = len(kept) != len(self._friendships)
        self._friendships = kept
        return removed
