"""Post aggregate root.

Score and comment count are derived from the vote ledger and the comment
table on read; neither is stored on the post.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from agora.domain.model.common import DomainModel, utc_now
from agora.domain.value import GroupId, PostId, UserId


class Post(DomainModel):
    """Post aggregate root."""

    id: PostId
    title: str = Field(min_length=1, max_length=300)
    content: Optional[str] = Field(default=None, max_length=40000)
    author_id: UserId
    group_id: Optional[GroupId] = None
    created_at: datetime = Field(default_factory=utc_now)
