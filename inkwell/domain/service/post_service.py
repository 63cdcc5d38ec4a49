"""Post domain service."""

from datetime import datetime, timezone
from uuid import uuid4

import logfire

from inkwell.domain.error import ValidationError
from inkwell.domain.model.post import Post
from inkwell.domain.repository import PostRepository
from inkwell.domain.value import PostId, PostSortOrder, UserId
from inkwell.domain.value.types import DisplayName

from .base import Service


class PostService(Service):
    """Domain service for blog post operations."""

    def __init__(self, post_repository: PostRepository) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
        """
        self.post_repository = post_repository

    async def create_post(
        self,
        author_id: UserId,
        author_name: DisplayName,
        title: str,
        content: str,
        image_url: str | None = None,
    ) -> Post:
        """Create a blog post.

        Args:
            author_id: Author user ID
            author_name: Author display name
            title: Post title
            content: Post body in markup syntax
            image_url: Cover image URL from the image store

        Returns:
            Saved post

        Raises:
            ValidationError: If title or content is blank
        """
        with logfire.span(
            "post_service.create_post", author_id=str(author_id), title=title
        ):
            title, content = self._clean(title, content)
            now = datetime.now(timezone.utc)
            post = Post(
                id=PostId(uuid4()),
                author_id=author_id,
                author_name=author_name,
                title=title,
                content=content,
                image_url=image_url,
                view_count=0,
                created_at=now,
                updated_at=now,
            )
            saved = await self.post_repository.save(post)
            logfire.info("Post created", post_id=str(saved.id))
            return saved

    async def get_post_by_id(self, post_id: PostId) -> Post | None:
        """Get a post by ID.

        Args:
            post_id: Post ID

        Returns:
            Post if found, None otherwise
        """
        with logfire.span("post_service.get_post_by_id", post_id=str(post_id)):
            post = await self.post_repository.find_by_id(post_id)

            if post:
                logfire.info("Post found", post_id=str(post_id), title=post.title)
            else:
                logfire.warn("Post not found", post_id=str(post_id))

            return post

    async def update_post(
        self,
        post: Post,
        title: str,
        content: str,
        image_url: str | None,
    ) -> Post:
        """Replace the editable fields of a post.

        Args:
            post: Current post
            title: New title
            content: New body
            image_url: New cover image URL (None removes it)

        Returns:
            Updated post
        """
        with logfire.span("post_service.update_post", post_id=str(post.id)):
            title, content = self._clean(title, content)
            updated = Post.model_validate(
                {
                    **post.model_dump(),
                    "title": title,
                    "content": content,
                    "image_url": image_url,
                    "updated_at": datetime.now(timezone.utc),
                }
            )
            saved = await self.post_repository.save(updated)
            logfire.info("Post updated", post_id=str(saved.id))
            return saved

    async def delete_post(self, post_id: PostId) -> bool:
        """Delete a post.

        Args:
            post_id: Post ID

        Returns:
            True if the post existed
        """
        with logfire.span("post_service.delete_post", post_id=str(post_id)):
            deleted = await self.post_repository.delete(post_id)
            if deleted:
                logfire.info("Post deleted", post_id=str(post_id))
            else:
                logfire.warn("Post not found for deletion", post_id=str(post_id))
            return deleted

    async def list_posts(
        self,
        search: str | None = None,
        author_id: UserId | None = None,
        sort: PostSortOrder = PostSortOrder.LATEST,
        limit: int = 30,
        offset: int = 0,
    ) -> tuple[list[Post], int]:
        """Search and page through posts.

        Args:
            search: Case-insensitive term matched against title or content
            author_id: Only posts by this author
            sort: Latest or oldest first, by last update
            limit: Page size
            offset: Page offset

        Returns:
            Page of posts and the total number of matches
        """
        search = search.strip() if search else None
        with logfire.span(
            "post_service.list_posts",
            search=search,
            author_id=str(author_id) if author_id else None,
            sort=sort.value,
            limit=limit,
            offset=offset,
        ):
            posts = await self.post_repository.find_all(
                search=search or None,
                author_id=author_id,
                sort=sort,
                limit=limit,
                offset=offset,
            )
            total = await self.post_repository.count(
                search=search or None, author_id=author_id
            )
            logfire.info("Posts listed", count=len(posts), total=total)
            return posts, total

    async def record_view(self, post_id: PostId) -> None:
        """Count one view of a post.

        Args:
            post_id: Post ID
        """
        with logfire.span("post_service.record_view", post_id=str(post_id)):
            await self.post_repository.increment_view_count(post_id)

    @staticmethod
    def _clean(title: str, content: str) -> tuple[str, str]:
        title = title.strip()
        if not title:
            raise ValidationError("Title cannot be empty")
        if not content.strip():
            raise ValidationError("Content cannot be empty")
        return title, content
