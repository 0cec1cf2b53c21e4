"""Async engine and session factory for the PostgreSQL store."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from agora.config import Settings

APPLICATION_NAME = "agora-engine"


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the pooled asyncpg engine described by ``settings.database``."""
    return create_async_engine(
        settings.database.url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
        # Shows up in pg_stat_activity next to each connection
        connect_args={"server_settings": {"application_name": APPLICATION_NAME}},
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Sessions keep loaded rows usable after commit; flushes are explicit."""
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
