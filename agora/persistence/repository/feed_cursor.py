"""PostgreSQL implementation of FeedCursor repository."""

from typing import Optional

from sqlalchemy import and_, delete, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.model import FeedCursor
from agora.domain.repository import FeedCursorRepository
from agora.persistence.mappers import feed_cursor_to_dict, row_to_feed_cursor
from agora.persistence.tables import feed_cursors_table


class PostgresFeedCursorRepository(FeedCursorRepository):
    """PostgreSQL implementation of FeedCursorRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _key(self, session_id: str, feed_key: str):
        return and_(
            feed_cursors_table.c.session_id == session_id,
            feed_cursors_table.c.feed_key == feed_key,
        )

    async def get(self, session_id: str, feed_key: str) -> Optional[FeedCursor]:
        """Load the cursor of a session on a feed."""
        stmt = select(feed_cursors_table).where(self._key(session_id, feed_key))
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_feed_cursor(row._asdict()) if row else None

    async def lock(self, session_id: str, feed_key: str) -> FeedCursor:
        """Insert an empty cursor if missing, then SELECT ... FOR UPDATE it."""
        empty = FeedCursor(session_id=session_id, feed_key=feed_key)
        await self.session.execute(
            insert(feed_cursors_table)
            .values(**feed_cursor_to_dict(empty))
            .on_conflict_do_nothing(constraint="pk_feed_cursors")
        )
        stmt = (
            select(feed_cursors_table)
            .where(self._key(session_id, feed_key))
            .with_for_update()
        )
        row = (await self.session.execute(stmt)).one()
        return row_to_feed_cursor(row._asdict())

    async def save(self, cursor: FeedCursor) -> FeedCursor:
        """Upsert the cursor for its session and feed."""
        values = feed_cursor_to_dict(cursor)
        stmt = insert(feed_cursors_table).values(**values)
        stmt = stmt.on_conflict_do_update(
            constraint="pk_feed_cursors",
            set_={
                "next_page": stmt.excluded.next_page,
                "seen_ids": stmt.excluded.seen_ids,
                "updated_at": stmt.excluded.updated_at,
            },
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return cursor

    async def delete(self, session_id: str, feed_key: str) -> bool:
        """Discard a cursor."""
        stmt = delete(feed_cursors_table).where(self._key(session_id, feed_key))
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]
