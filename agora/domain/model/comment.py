"""Comment entity.

Comments form a forest per post: a comment without a parent is a root,
every other comment replies to a comment on the same post. Depth is
unbounded and is not stored.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from agora.domain.model.common import DomainModel, utc_now
from agora.domain.value import CommentId, PostId, UserId


class Comment(DomainModel):
    """Comment entity.

    Content is immutable once written.
    """

    id: CommentId
    post_id: PostId
    author_id: UserId
    content: str = Field(min_length=1, max_length=10000)
    parent_id: Optional[CommentId] = None
    created_at: datetime = Field(default_factory=utc_now)

    @property
    def is_root(self) -> bool:
        return self.parent_id is None
