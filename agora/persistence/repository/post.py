"""PostgreSQL implementation of Post repository."""

from typing import List, Optional, Tuple

import logfire
from sqlalchemy import Select, func, insert, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.model import Post
from agora.domain.repository.post import PostFilter, PostRepository, PostSort
from agora.domain.value import PostId
from agora.persistence.mappers import post_to_dict, row_to_post
from agora.persistence.tables import posts_table


def _like_pattern(query: str) -> str:
    """Substring pattern with LIKE wildcards in the query matched literally."""
    escaped = (
        query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    )
    return f"%{escaped}%"


def _apply_filter(stmt: Select, post_filter: PostFilter) -> Select:
    if post_filter.author_ids is not None:
        stmt = stmt.where(posts_table.c.author_id.in_(post_filter.author_ids))
    if post_filter.group_id is not None:
        stmt = stmt.where(posts_table.c.group_id == post_filter.group_id)
    if post_filter.created_after is not None:
        stmt = stmt.where(posts_table.c.created_at >= post_filter.created_after)
    if post_filter.query:
        pattern = _like_pattern(post_filter.query)
        stmt = stmt.where(
            or_(
                posts_table.c.title.ilike(pattern, escape="\\"),
                posts_table.c.content.ilike(pattern, escape="\\"),
            )
        )
    return stmt


_ORDERINGS = {
    PostSort.RECENT: (posts_table.c.created_at.desc(), posts_table.c.id),
    PostSort.OLDEST: (posts_table.c.created_at.asc(), posts_table.c.id),
}


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        with logfire.span("post_repository.find_by_id", post_id=str(post_id)):
            stmt = select(posts_table).where(posts_table.c.id == post_id)
            result = await self.session.execute(stmt)
            row = result.fetchone()
            return row_to_post(row._asdict()) if row else None

    async def find_posts(
        self,
        post_filter: PostFilter,
        sort: PostSort = PostSort.RECENT,
        offset: int = 0,
        limit: int = 25,
    ) -> Tuple[List[Post], int]:
        """Find one page of posts in ``sort`` order, and the total count."""
        with logfire.span(
            "post_repository.find_posts",
            group_id=str(post_filter.group_id) if post_filter.group_id else None,
            authors=len(post_filter.author_ids) if post_filter.author_ids else None,
            query=post_filter.query,
            sort=sort.value,
            offset=offset,
            limit=limit,
        ):
            count_stmt = _apply_filter(
                select(func.count()).select_from(posts_table), post_filter
            )
            total = (await self.session.execute(count_stmt)).scalar() or 0

            stmt = (
                _apply_filter(select(posts_table), post_filter)
                .order_by(*_ORDERINGS[sort])
                .offset(offset)
                .limit(limit)
            )
            result = await self.session.execute(stmt)
            posts = [row_to_post(row._asdict()) for row in result.fetchall()]

            logfire.debug("Posts page fetched", count=len(posts), total=total)
            return posts, total

    async def find_all(self, post_filter: PostFilter) -> List[Post]:
        """Find every post matching the filter."""
        with logfire.span("post_repository.find_all"):
            stmt = _apply_filter(select(posts_table), post_filter)
            result = await self.session.execute(stmt)
            return [row_to_post(row._asdict()) for row in result.fetchall()]

    async def save(self, post: Post) -> Post:
        """Insert a post."""
        stmt = insert(posts_table).values(**post_to_dict(post))
        await self.session.execute(stmt)
        await self.session.flush()
        return post
