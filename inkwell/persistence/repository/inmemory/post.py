"""In-memory post repository for testing."""

from typing import Optional

from inkwell.domain.model.post import Post
from inkwell.domain.repository.post import PostRepository
from inkwell.domain.value import PostId, PostSortOrder, UserId


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self) -> None:
        self._posts: dict[PostId, Post] = {}

    def _matching(
        self, search: Optional[str], author_id: Optional[UserId]
    ) -> list[Post]:
        posts = list(self._posts.values())
        if search:
            term = search.lower()
            posts = [
                p
                for p in posts
                if term in p.title.lower() or term in p.content.lower()
            ]
        if author_id:
            posts = [p for p in posts if p.author_id == author_id]
        return posts

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        return self._posts.get(post_id)

    async def find_all(
        self,
        search: Optional[str] = None,
        author_id: Optional[UserId] = None,
        sort: PostSortOrder = PostSortOrder.LATEST,
        limit: int = 30,
        offset: int = 0,
    ) -> list[Post]:
        """Find posts with filtering and pagination."""
        posts = self._matching(search, author_id)
        posts.sort(
            key=lambda p: (p.updated_at, str(p.id)),
            reverse=sort == PostSortOrder.LATEST,
        )
        return posts[offset : offset + limit]

    async def count(
        self, search: Optional[str] = None, author_id: Optional[UserId] = None
    ) -> int:
        """Count posts matching the filters."""
        return len(self._matching(search, author_id))

    async def save(self, post: Post) -> Post:
        """Save or update a post."""
        self._posts[post.id] = post
        return post

    async def delete(self, post_id: PostId) -> bool:
        """Delete a post."""
        return self._posts.pop(post_id, None) is not None

    async def increment_view_count(self, post_id: PostId) -> None:
        """Add one view."""
        post = self._posts.get(post_id)
        if post:
            self._posts[post_id] = post.model_copy(
                update={"view_count": post.view_count + 1}
            )
