"""PostgreSQL implementation of Post repository."""

from typing import List, Optional

import logfire
from sqlalchemy import asc, desc, func, or_, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from inkwell.domain.model import Post
from inkwell.domain.repository import PostRepository
from inkwell.domain.value import PostId, PostSortOrder, UserId
from inkwell.persistence.database import store_errors
from inkwell.persistence.mappers import post_to_dict, row_to_post
from inkwell.persistence.tables import posts_table


def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _filtered(self, stmt, search: Optional[str], author_id: Optional[UserId]):
        """Apply the search and author filters shared by find_all and count."""
        if search:
            pattern = _like_pattern(search)
            stmt = stmt.where(
                or_(
                    posts_table.c.title.ilike(pattern, escape="\\"),
                    posts_table.c.content.ilike(pattern, escape="\\"),
                )
            )
        if author_id:
            stmt = stmt.where(posts_table.c.author_id == author_id)
        return stmt

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        with logfire.span("post_repository.find_by_id", post_id=str(post_id)):
            with store_errors("posts.find_by_id"):
                stmt = select(posts_table).where(posts_table.c.id == post_id)
                result = await self.session.execute(stmt)
                row = result.fetchone()

            if not row:
                logfire.warn("Post not found", post_id=str(post_id))
                return None

            return row_to_post(row._asdict())

    async def find_all(
        self,
        search: Optional[str] = None,
        author_id: Optional[UserId] = None,
        sort: PostSortOrder = PostSortOrder.LATEST,
        limit: int = 30,
        offset: int = 0,
    ) -> List[Post]:
        """Find posts with filtering and pagination."""
        with logfire.span(
            "post_repository.find_all",
            search=search,
            sort=sort.value,
            limit=limit,
            offset=offset,
        ):
            order = desc if sort == PostSortOrder.LATEST else asc
            stmt = self._filtered(select(posts_table), search, author_id)
            stmt = (
                stmt.order_by(order(posts_table.c.updated_at), order(posts_table.c.id))
                .limit(limit)
                .offset(offset)
            )
            with store_errors("posts.find_all"):
                result = await self.session.execute(stmt)
                rows = result.fetchall()

            return [row_to_post(row._asdict()) for row in rows]

    async def count(
        self, search: Optional[str] = None, author_id: Optional[UserId] = None
    ) -> int:
        """Count posts matching the filters."""
        stmt = self._filtered(
            select(func.count()).select_from(posts_table), search, author_id
        )
        with store_errors("posts.count"):
            result = await self.session.execute(stmt)
            return result.scalar() or 0

    async def save(self, post: Post) -> Post:
        """Save a post (create or update)."""
        with logfire.span("post_repository.save", post_id=str(post.id)):
            values = post_to_dict(post)
            stmt = insert(posts_table).values(**values)
            stmt = stmt.on_conflict_do_update(
                index_elements=[posts_table.c.id],
                set_={
                    "title": stmt.excluded.title,
                    "content": stmt.excluded.content,
                    "image_url": stmt.excluded.image_url,
                    "author_name": stmt.excluded.author_name,
                    "updated_at": stmt.excluded.updated_at,
                },
            ).returning(posts_table)
            with store_errors("posts.save"):
                result = await self.session.execute(stmt)
                row = result.fetchone()
                await self.session.flush()
            return row_to_post(row._asdict())

    async def delete(self, post_id: PostId) -> bool:
        """Delete a post; comments go with it through the foreign key."""
        with store_errors("posts.delete"):
            stmt = posts_table.delete().where(posts_table.c.id == post_id)
            result = await self.session.execute(stmt)
            await self.session.flush()
        return result.rowcount > 0

    async def increment_view_count(self, post_id: PostId) -> None:
        """Atomically increment view_count by 1."""
        with store_errors("posts.increment_view_count"):
            stmt = (
                posts_table.update()
                .where(posts_table.c.id == post_id)
                .values(view_count=posts_table.c.view_count + 1)
            )
            await self.session.execute(stmt)
            await self.session.flush()
