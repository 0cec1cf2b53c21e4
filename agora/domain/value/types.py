"""Domain value objects for Agora.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import calendar
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional
from uuid import UUID

from agora.domain.error import InvalidInputError, InvalidTargetError
from agora.domain.value.common import ValueObject
from agora.domain.value.identifiers import CommentId, GroupId, PostId, UserId


class VotableType(str, Enum):
    """Type of entity that can be voted on."""

    POST = "post"
    COMMENT = "comment"


class VoteTarget(ValueObject):
    """The single post or comment a vote applies to.

    Build it with ``VoteTarget.of`` so the post/comment exclusivity
    rule is enforced at the boundary.
    """

    votable_type: VotableType
    votable_id: UUID

    @classmethod
    def of(
        cls,
        post_id: Optional[PostId] = None,
        comment_id: Optional[CommentId] = None,
    ) -> "VoteTarget":
        """Create a target from exactly one of post_id or comment_id.

        Raises:
            InvalidTargetError: If both or neither id is given
        """
        if post_id is not None and comment_id is not None:
            raise InvalidTargetError("Vote target must be a post or a comment, not both")
        if post_id is not None:
            return cls(votable_type=VotableType.POST, votable_id=post_id)
        if comment_id is not None:
            return cls(votable_type=VotableType.COMMENT, votable_id=comment_id)
        raise InvalidTargetError("Vote target requires a post_id or a comment_id")

    def __str__(self) -> str:
        return f"{self.votable_type.value}:{self.votable_id}"


class FeedPeriod(str, Enum):
    """Time window for the popular feed."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    ALL = "all"

    def window_start(self, now: datetime) -> Optional[datetime]:
        """Earliest creation time included in this period.

        MONTH steps back one calendar month and clamps to the last day of
        that month (31 March -> 28/29 February).

        Args:
            now: Reference time, normally the time of the request

        Returns:
            Inclusive lower bound, or None for ALL
        """
        if self is FeedPeriod.DAY:
            return now - timedelta(days=1)
        if self is FeedPeriod.WEEK:
            return now - timedelta(days=7)
        if self is FeedPeriod.MONTH:
            year, month = (
                (now.year, now.month - 1) if now.month > 1 else (now.year - 1, 12)
            )
            day = min(now.day, calendar.monthrange(year, month)[1])
            return now.replace(year=year, month=month, day=day)
        return None


class FeedKind(str, Enum):
    """Kinds of paginated post feeds."""

    RECENT = "recent"  # created_at DESC
    POPULAR = "popular"  # score DESC within a period
    FRIENDS = "friends"  # recent posts by the viewer's friends
    GROUP = "group"  # recent posts in one group
    SEARCH = "search"  # recent posts whose title or content match a query


MAX_QUERY_LENGTH = 200


class FeedSpec(ValueObject):
    """Identifies one feed a client paginates through."""

    kind: FeedKind
    period: FeedPeriod = FeedPeriod.ALL
    viewer_id: Optional[UserId] = None
    group_id: Optional[GroupId] = None
    query: Optional[str] = None

    def validate_requirements(self) -> None:
        """Check that the parameters this kind of feed needs are present.

        Raises:
            InvalidInputError: If a friends feed has no viewer, a group feed
                has no group, or a search feed has a blank or overlong query
        """
        if self.kind is FeedKind.FRIENDS and self.viewer_id is None:
            raise InvalidInputError("Friends feed requires a viewer")
        if self.kind is FeedKind.GROUP and self.group_id is None:
            raise InvalidInputError("Group feed requires a group_id")
        if self.kind is FeedKind.SEARCH:
            if not self.search_terms:
                raise InvalidInputError("Search feed requires a non-blank query")
            if len(self.search_terms) > MAX_QUERY_LENGTH:
                raise InvalidInputError(
                    f"Search query must be at most {MAX_QUERY_LENGTH} characters"
                )

    @property
    def search_terms(self) -> str:
        """The query as matched: trimmed, case folded."""
        return (self.query or "").strip().lower()

    @property
    def key(self) -> str:
        """Stable feed identifier used to scope pagination state."""
        if self.kind is FeedKind.POPULAR:
            return f"popular:{self.period.value}"
        if self.kind is FeedKind.FRIENDS:
            return f"friends:{self.viewer_id}"
        if self.kind is FeedKind.GROUP:
            return f"group:{self.group_id}"
        if self.kind is FeedKind.SEARCH:
            return f"search:{self.search_terms}"
        return self.kind.value
