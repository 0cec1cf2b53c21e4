"""Persistence provider backed by in-memory repositories."""

from dishka import Scope, provide

from agora.domain.repository import (
    CommentRepository,
    FeedCursorRepository,
    FriendshipRepository,
    PostRepository,
    VoteRepository,
)
from agora.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryFeedCursorRepository,
    InMemoryFriendshipRepository,
    InMemoryPostRepository,
    InMemoryVoteRepository,
)
from agora.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """In-memory repositories, fresh for every request scope."""

    __is_mock__ = True

    posts = provide(
        InMemoryPostRepository, provides=PostRepository, scope=Scope.REQUEST
    )
    comments = provide(
        InMemoryCommentRepository, provides=CommentRepository, scope=Scope.REQUEST
    )
    votes = provide(
        InMemoryVoteRepository, provides=VoteRepository, scope=Scope.REQUEST
    )
    friendships = provide(
        InMemoryFriendshipRepository,
        provides=FriendshipRepository,
        scope=Scope.REQUEST,
    )
    feed_cursors = provide(
        InMemoryFeedCursorRepository,
        provides=FeedCursorRepository,
        scope=Scope.REQUEST,
    )
