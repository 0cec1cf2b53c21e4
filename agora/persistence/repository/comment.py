"""PostgreSQL implementation of Comment repository."""

from typing import Dict, List, Optional, Sequence

from sqlalchemy import func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.model import Comment
from agora.domain.repository import CommentOrder, CommentRepository
from agora.domain.value import CommentId, PostId
from agora.persistence.mappers import comment_to_dict, row_to_comment
from agora.persistence.tables import comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_by_post(
        self,
        post_id: PostId,
        order: CommentOrder = CommentOrder.NEWEST,
    ) -> List[Comment]:
        """Find every comment on a post as a flat list."""
        created_at = comments_table.c.created_at
        stmt = (
            select(comments_table)
            .where(comments_table.c.post_id == post_id)
            .order_by(
                created_at.desc() if order == CommentOrder.NEWEST else created_at.asc(),
                comments_table.c.id,
            )
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def save(self, comment: Comment) -> Comment:
        """Insert a comment."""
        stmt = insert(comments_table).values(**comment_to_dict(comment))
        await self.session.execute(stmt)
        await self.session.flush()
        return comment

    async def count_by_posts(self, post_ids: Sequence[PostId]) -> Dict[PostId, int]:
        """Count comments for several posts in one query."""
        if not post_ids:
            return {}

        stmt = (
            select(comments_table.c.post_id, func.count().label("count"))
            .where(comments_table.c.post_id.in_(post_ids))
            .group_by(comments_table.c.post_id)
        )
        result = await self.session.execute(stmt)
        return {PostId(row.post_id): row.count for row in result.fetchall()}
