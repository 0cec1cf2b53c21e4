"""In-memory feed cursor repository for testing."""

from typing import Optional

from agora.domain.model.feed import FeedCursor
from agora.domain.repository.feed_cursor import FeedCursorRepository


class InMemoryFeedCursorRepository(FeedCursorRepository):
    """In-memory implementation of FeedCursorRepository for testing."""

    def __init__(self) -> None:
        self._cursors: dict[tuple[str, str], FeedCursor] = {}

    async def get(self, session_id: str, feed_key: str) -> Optional[FeedCursor]:
        """Load the cursor of a session on a feed."""
        return self._cursors.get((session_id, feed_key))

    async def lock(self, session_id: str, feed_key: str) -> FeedCursor:
        """Load or create the cursor."""
        key = (session_id, feed_key)
        if key not in self._cursors:
            self._cursors[key] = FeedCursor(session_id=session_id, feed_key=feed_key)
        return self._cursors[key]

    async def save(self, cursor: FeedCursor) -> FeedCursor:
        """Create or replace the cursor."""
        self._cursors[(cursor.session_id, cursor.feed_key)] = cursor
        return cursor

    async def delete(self, session_id: str, feed_key: str) -> bool:
        """Discard a cursor."""
        return self._cursors.pop((session_id, feed_key), None) is not None
