"""Feed cursor repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from agora.domain.model.feed import FeedCursor


class FeedCursorRepository(ABC):
    """Repository for per-session feed pagination state."""

    @abstractmethod
    async def get(self, session_id: str, feed_key: str) -> Optional[FeedCursor]:
        """Load the cursor of a session on a feed, if any."""
        pass

    @abstractmethod
    async def lock(self, session_id: str, feed_key: str) -> FeedCursor:
        """Load the cursor for update, creating an empty one if missing.

        Concurrent callers for the same session and feed wait until the
        holder's transaction ends, then see its saved state.
        """
        pass

    @abstractmethod
    async def save(self, cursor: FeedCursor) -> FeedCursor:
        """Create or replace the cursor for its session and feed."""
        pass

    @abstractmethod
    async def delete(self, session_id: str, feed_key: str) -> bool:
        """Discard a cursor.

        Returns:
            True if a cursor existed
        """
        pass
