"""List feed use case."""

from datetime import datetime

from pydantic import BaseModel

from agora.application.usecase.base import BaseUseCase, parse_optional_uuid
from agora.config import FeedSettings
from agora.domain.service import FeedItem, FeedService
from agora.domain.value import FeedKind, FeedPeriod, FeedSpec, GroupId, UserId


class FeedRequest(BaseModel):
    """Feed selection shared by the listing and reset use cases."""

    session_id: str
    kind: FeedKind
    period: FeedPeriod | None = None  # popular feed only
    user_id: str | None = None  # viewer; required for the friends feed
    group_id: str | None = None  # required for the group feed
    query: str | None = None  # required for the search feed

    def to_spec(self, default_period: FeedPeriod) -> FeedSpec:
        viewer = parse_optional_uuid(self.user_id, "user_id")
        group = parse_optional_uuid(self.group_id, "group_id")
        return FeedSpec(
            kind=self.kind,
            period=(self.period or default_period)
            if self.kind is FeedKind.POPULAR
            else FeedPeriod.ALL,
            viewer_id=UserId(viewer) if viewer else None,
            group_id=GroupId(group) if group else None,
            query=self.query if self.kind is FeedKind.SEARCH else None,
        )


class ListFeedRequest(FeedRequest):
    """List feed request."""

    page_size: int | None = None
    page: int | None = None  # None continues where the session left off


class FeedPostItem(BaseModel):
    """Post in a feed page."""

    post_id: str
    title: str
    content: str | None
    author_id: str
    group_id: str | None
    created_at: datetime
    score: int
    comment_count: int

    @classmethod
    def from_domain(cls, item: FeedItem) -> "FeedPostItem":
        post = item.post
        return cls(
            post_id=str(post.id),
            title=post.title,
            content=post.content,
            author_id=str(post.author_id),
            group_id=str(post.group_id) if post.group_id else None,
            created_at=post.created_at,
            score=item.score,
            comment_count=item.comment_count,
        )


class ListFeedResponse(BaseModel):
    """List feed response."""

    session_id: str  # send back to continue this feed
    feed: str
    posts: list[FeedPostItem]
    page: int
    has_more: bool


class ListFeedUseCase(BaseUseCase):
    """Use case for paging through a post feed without repeats."""

    def __init__(self, feed_service: FeedService, feed_settings: FeedSettings) -> None:
        """Initialize list feed use case.

        Args:
            feed_service: Feed domain service
            feed_settings: Feed defaults
        """
        self.feed_service = feed_service
        self.feed_settings = feed_settings

    async def execute(self, request: ListFeedRequest) -> ListFeedResponse:
        """Execute list feed flow.

        Raises:
            InvalidInputError: On a bad page, page size or feed selection
        """
        feed = request.to_spec(self.feed_settings.default_period)
        page = await self.feed_service.next_page(
            session_id=request.session_id,
            feed=feed,
            page_size=request.page_size,
            page=request.page,
        )

        return ListFeedResponse(
            session_id=request.session_id,
            feed=feed.key,
            posts=[FeedPostItem.from_domain(item) for item in page.items],
            page=page.page,
            has_more=page.has_more,
        )
