"""Feed domain service: paginated post feeds without duplicates.

Every session keeps a cursor per feed holding the next underlying page
and the ids already delivered. Pages are computed against the current
state of the store, so posts created between requests can shift items
across page boundaries; the cursor filters out anything already served
and moves on to the next page whenever a page turns out to hold nothing
new.
"""

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Protocol, Sequence

import logfire

from agora.config import FeedSettings
from agora.domain.error import InvalidInputError
from agora.domain.model.common import utc_now
from agora.domain.model.post import Post
from agora.domain.repository import (
    FeedCursorRepository,
    FriendshipRepository,
    PostFilter,
    PostRepository,
    PostSort,
)
from agora.domain.value import FeedKind, FeedSpec, VotableType

from .base import Service, storage_errors
from .comment_service import CommentService
from .ranking import rank_by_popularity
from .vote_service import VoteService


@dataclass(frozen=True)
class FeedItem:
    """A post as served in a feed, with its derived counters."""

    post: Post
    score: int
    comment_count: int


@dataclass(frozen=True)
class FeedPage:
    """One page of a feed.

    ``items`` is empty only when ``has_more`` is False.
    """

    items: list[FeedItem]
    has_more: bool
    page: int


class _PostSource(Protocol):
    async def fetch(self, offset: int, limit: int) -> tuple[list[Post], int]: ...


class _FilteredSource:
    """Newest-first posts straight from the repository."""

    def __init__(self, post_repository: PostRepository, post_filter: PostFilter):
        self.post_repository = post_repository
        self.post_filter = post_filter

    async def fetch(self, offset: int, limit: int) -> tuple[list[Post], int]:
        return await self.post_repository.find_posts(
            self.post_filter, PostSort.RECENT, offset=offset, limit=limit
        )


class _ListSource:
    """A precomputed ordering, sliced in memory."""

    def __init__(self, posts: Sequence[Post]):
        self.posts = list(posts)

    async def fetch(self, offset: int, limit: int) -> tuple[list[Post], int]:
        return self.posts[offset : offset + limit], len(self.posts)


class FeedService(Service):
    """Domain service assembling recent, popular, friends, group and search feeds."""

    def __init__(
        self,
        post_repository: PostRepository,
        friendship_repository: FriendshipRepository,
        feed_cursor_repository: FeedCursorRepository,
        vote_service: VoteService,
        comment_service: CommentService,
        feed_settings: FeedSettings,
    ) -> None:
        self.post_repository = post_repository
        self.friendship_repository = friendship_repository
        self.feed_cursor_repository = feed_cursor_repository
        self.vote_service = vote_service
        self.comment_service = comment_service
        self.feed_settings = feed_settings

    async def next_page(
        self,
        session_id: str,
        feed: FeedSpec,
        page_size: Optional[int] = None,
        page: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> FeedPage:
        """Serve the next page of a feed to a session.

        Args:
            session_id: Client session the pagination state belongs to
            feed: Which feed to read
            page_size: Posts per underlying page; defaults to the setting
            page: 1-indexed underlying page to start from; defaults to the
                session's next page
            now: Reference time for popular windows; defaults to now

        Returns:
            Posts not yet delivered to this session, and whether more
            pages remain

        Raises:
            InvalidInputError: For a bad page, page size or FeedSpec
            StorageError: On persistence failure
        """
        size = (
            page_size if page_size is not None else self.feed_settings.default_page_size
        )
        if size < 1 or size > self.feed_settings.max_page_size:
            raise InvalidInputError(
                f"page_size must be between 1 and {self.feed_settings.max_page_size}"
            )
        if page is not None and page < 1:
            raise InvalidInputError("page must be 1 or greater")
        if not session_id:
            raise InvalidInputError("session_id is required")
        feed.validate_requirements()

        with logfire.span(
            "feed_service.next_page",
            session_id=session_id,
            feed=feed.key,
            page_size=size,
            page=page,
        ):
            with storage_errors("next_page"):
                # Held until the request transaction ends, so overlapping
                # requests of one session serve consecutive pages
                cursor = await self.feed_cursor_repository.lock(session_id, feed.key)

                current = page if page is not None else cursor.next_page
                source = await self._source_for(feed, now or utc_now())

                while True:
                    posts, total = await source.fetch((current - 1) * size, size)
                    fresh = [post for post in posts if not cursor.has_seen(post.id)]
                    has_more = current < math.ceil(total / size)
                    if fresh or not has_more:
                        break
                    logfire.debug(
                        "Page held only delivered posts, advancing",
                        feed=feed.key,
                        page=current,
                    )
                    current += 1

                await self.feed_cursor_repository.save(
                    cursor.advance(current, (post.id for post in fresh))
                )
                items = await self._decorate(fresh)

            logfire.info(
                "Feed page served",
                session_id=session_id,
                feed=feed.key,
                page=current,
                count=len(items),
                has_more=has_more,
            )
            return FeedPage(items=items, has_more=has_more, page=current)

    async def reset(self, session_id: str, feed: FeedSpec) -> bool:
        """Forget what a session has seen on a feed (pull to refresh).

        Returns:
            True if the session had a cursor
        """
        with logfire.span("feed_service.reset", session_id=session_id, feed=feed.key):
            with storage_errors("reset_feed"):
                removed = await self.feed_cursor_repository.delete(session_id, feed.key)
            logfire.info(
                "Feed cursor reset", session_id=session_id, feed=feed.key, removed=removed
            )
            return removed

    async def _source_for(self, feed: FeedSpec, now: datetime) -> _PostSource:
        if feed.kind is FeedKind.POPULAR:
            window_start = feed.period.window_start(now)
            posts = await self.post_repository.find_all(
                PostFilter(created_after=window_start)
            )
            votes = await self.vote_service.votes_by_target(
                VotableType.POST, [post.id for post in posts]
            )
            ranked = rank_by_popularity(posts, votes, window_start)
            return _ListSource([r.post for r in ranked])

        if feed.kind is FeedKind.FRIENDS:
            if feed.viewer_id is None:
                raise InvalidInputError("Friends feed requires a viewer")
            friend_ids = await self.friendship_repository.find_friend_ids(
                feed.viewer_id
            )
            if not friend_ids:
                return _ListSource([])
            return _FilteredSource(
                self.post_repository, PostFilter(author_ids=frozenset(friend_ids))
            )

        if feed.kind is FeedKind.GROUP:
            return _FilteredSource(
                self.post_repository, PostFilter(group_id=feed.group_id)
            )

        if feed.kind is FeedKind.SEARCH:
            return _FilteredSource(
                self.post_repository, PostFilter(query=feed.search_terms)
            )

        return _FilteredSource(self.post_repository, PostFilter())

    async def _decorate(self, posts: list[Post]) -> list[FeedItem]:
        if not posts:
            return []
        ids = [post.id for post in posts]
        scores = await self.vote_service.compute_scores(VotableType.POST, ids)
        counts = await self.comment_service.count_by_posts(ids)
        return [
            FeedItem(
                post=post,
                score=scores.get(post.id, 0),
                comment_count=counts.get(post.id, 0),
            )
            for post in posts
        ]
