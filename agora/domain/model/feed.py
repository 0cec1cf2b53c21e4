"""Feed cursor entity.

A cursor is the pagination state of one client session on one feed: the
next underlying page to fetch and every post id already delivered.
"""

from datetime import datetime
from typing import Iterable
from uuid import UUID

from pydantic import Field

from agora.domain.model.common import DomainModel, utc_now


class FeedCursor(DomainModel):
    """Per-session pagination state for a feed."""

    session_id: str = Field(min_length=1, max_length=255)
    feed_key: str = Field(min_length=1, max_length=255)
    next_page: int = Field(default=1, ge=1)
    seen_ids: frozenset[UUID] = frozenset()
    updated_at: datetime = Field(default_factory=utc_now)

    def has_seen(self, item_id: UUID) -> bool:
        return item_id in self.seen_ids

    def advance(self, page: int, delivered: Iterable[UUID]) -> "FeedCursor":
        """Return the cursor after ``page`` was served with ``delivered`` ids."""
        return self.model_copy(
            update={
                "next_page": page + 1,
                "seen_ids": self.seen_ids | frozenset(delivered),
                "updated_at": utc_now(),
            }
        )
