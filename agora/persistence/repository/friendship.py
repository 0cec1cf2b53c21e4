"""PostgreSQL implementation of Friendship repository."""

from typing import Set

from sqlalchemy import and_, delete, insert, or_, select, union
from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.model import Friendship
from agora.domain.repository import FriendshipRepository
from agora.domain.value import UserId
from agora.persistence.mappers import friendship_to_dict
from agora.persistence.tables import friendships_table


class PostgresFriendshipRepository(FriendshipRepository):
    """PostgreSQL implementation of FriendshipRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_friend_ids(self, user_id: UserId) -> Set[UserId]:
        """Find every user linked to ``user_id`` in either direction."""
        stmt = union(
            select(friendships_table.c.friend_id.label("id")).where(
                friendships_table.c.user_id == user_id
            ),
            select(friendships_table.c.user_id.label("id")).where(
                friendships_table.c.friend_id == user_id
            ),
        )
        result = await self.session.execute(stmt)
        return {UserId(row.id) for row in result.fetchall()}

    def _between(self, user_id: UserId, other_id: UserId):
        return or_(
            and_(
                friendships_table.c.user_id == user_id,
                friendships_table.c.friend_id == other_id,
            ),
            and_(
                friendships_table.c.user_id == other_id,
                friendships_table.c.friend_id == user_id,
            ),
        )

    async def are_friends(self, user_id: UserId, other_id: UserId) -> bool:
        """Check whether a link exists in either direction."""
        stmt = (
            select(friendships_table.c.id)
            .where(self._between(user_id, other_id))
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def save(self, friendship: Friendship) -> Friendship:
        """Insert a friendship."""
        stmt = insert(friendships_table).values(**friendship_to_dict(friendship))
        await self.session.execute(stmt)
        await self.session.flush()
        return friendship

    async def delete_link(self, user_id: UserId, other_id: UserId) -> bool:
        """Remove the link between two users in either direction."""
        stmt = delete(friendships_table).where(self._between(user_id, other_id))
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]
