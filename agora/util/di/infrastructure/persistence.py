"""PostgreSQL persistence: engine, request sessions and repositories."""

from collections.abc import AsyncIterator

import logfire
from dishka import Scope, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from agora.config import Settings
from agora.domain.repository import (
    CommentRepository,
    FeedCursorRepository,
    FriendshipRepository,
    PostRepository,
    VoteRepository,
)
from agora.persistence.database import create_engine, create_session_factory
from agora.persistence.repository import (
    PostgresCommentRepository,
    PostgresFeedCursorRepository,
    PostgresFriendshipRepository,
    PostgresPostRepository,
    PostgresVoteRepository,
)
from agora.util.di.base import ProviderBase
from agora.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Mockable persistence component; see tests/di for the in-memory one."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Pooled engine for the life of the app container."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """One session, and one transaction, per request.

        Committed when the request finishes cleanly; any exception raised
        while the scope is open rolls the whole request back.
        """
        async with session_factory() as session:
            try:
                yield session
            except Exception as e:
                logfire.warn(
                    "Request transaction rolled back",
                    error_type=type(e).__name__,
                    error=str(e),
                )
                await session.rollback()
                raise
            await session.commit()

    posts = provide(
        PostgresPostRepository, provides=PostRepository, scope=Scope.REQUEST
    )
    comments = provide(
        PostgresCommentRepository, provides=CommentRepository, scope=Scope.REQUEST
    )
    votes = provide(
        PostgresVoteRepository, provides=VoteRepository, scope=Scope.REQUEST
    )
    friendships = provide(
        PostgresFriendshipRepository,
        provides=FriendshipRepository,
        scope=Scope.REQUEST,
    )
    feed_cursors = provide(
        PostgresFeedCursorRepository,
        provides=FeedCursorRepository,
        scope=Scope.REQUEST,
    )
