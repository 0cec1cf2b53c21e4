"""Feed use cases."""

from .list_feed import (
    FeedPostItem,
    FeedRequest,
    ListFeedRequest,
    ListFeedResponse,
    ListFeedUseCase,
)
from .reset_feed import ResetFeedResponse, ResetFeedUseCase

__all__ = [
    "FeedPostItem",
    "FeedRequest",
    "ListFeedRequest",
    "ListFeedResponse",
    "ListFeedUseCase",
    "ResetFeedResponse",
    "ResetFeedUseCase",
]
