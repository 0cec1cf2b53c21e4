"""Reset feed use case."""

from pydantic import BaseModel

from agora.application.usecase.base import BaseUseCase
from agora.config import FeedSettings
from agora.domain.service import FeedService

from .list_feed import FeedRequest


class ResetFeedResponse(BaseModel):
    """Reset feed response."""

    feed: str
    reset: bool  # False when the session had no cursor on this feed


class ResetFeedUseCase(BaseUseCase):
    """Use case for restarting a feed from its first page."""

    def __init__(self, feed_service: FeedService, feed_settings: FeedSettings) -> None:
        self.feed_service = feed_service
        self.feed_settings = feed_settings

    async def execute(self, request: FeedRequest) -> ResetFeedResponse:
        feed = request.to_spec(self.feed_settings.default_period)
        reset = await self.feed_service.reset(request.session_id, feed)
        return ResetFeedResponse(feed=feed.key, reset=reset)
