"""PostgreSQL implementation of Comment repository."""

from typing import List, Optional

import logfire
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from inkwell.domain.model import Comment
from inkwell.domain.repository import CommentRepository
from inkwell.domain.value import CommentId, PostId
from inkwell.persistence.database import store_errors
from inkwell.persistence.mappers import comment_to_dict, row_to_comment
from inkwell.persistence.tables import comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository.

    Change notifications are sent by the ``notify_comment_change`` trigger,
    so this class never publishes to the change feed itself.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        with store_errors("comments.find_by_id"):
            stmt = select(comments_table).where(comments_table.c.id == comment_id)
            result = await self.session.execute(stmt)
            row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def list_by_post(self, post_id: PostId) -> List[Comment]:
        """List every comment of a post, oldest first."""
        with store_errors("comments.list_by_post"):
            stmt = (
                select(comments_table)
                .where(comments_table.c.post_id == post_id)
                .order_by(comments_table.c.created_at, comments_table.c.seq)
            )
            result = await self.session.execute(stmt)
            rows = result.fetchall()
        return [row_to_comment(row._asdict()) for row in rows]

    async def insert(self, comment: Comment) -> Comment:
        """Insert a comment; seq comes from the identity column."""
        with logfire.span("comment_repository.insert", comment_id=str(comment.id)):
            with store_errors("comments.insert"):
                stmt = (
                    comments_table.insert()
                    .values(**comment_to_dict(comment))
                    .returning(comments_table)
                )
                result = await self.session.execute(stmt)
                row = result.fetchone()
                await self.session.flush()
            return row_to_comment(row._asdict())

    async def delete(self, comment_id: CommentId) -> bool:
        """Delete a comment (hard delete)."""
        with store_errors("comments.delete"):
            stmt = comments_table.delete().where(comments_table.c.id == comment_id)
            result = await self.session.execute(stmt)
            await self.session.flush()
        return result.rowcount > 0

    async def delete_by_post(self, post_id: PostId) -> int:
        """Delete every comment of a post."""
        with store_errors("comments.delete_by_post"):
            stmt = comments_table.delete().where(comments_table.c.post_id == post_id)
            result = await self.session.execute(stmt)
            await self.session.flush()
        return result.rowcount

    async def count_by_post(self, post_id: PostId) -> int:
        """Count comments for a post."""
        with store_errors("comments.count_by_post"):
            stmt = (
                select(func.count())
                .select_from(comments_table)
                .where(comments_table.c.post_id == post_id)
            )
            result = await self.session.execute(stmt)
            return result.scalar() or 0
