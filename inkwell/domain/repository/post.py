"""Post repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from inkwell.domain.model.post import Post
from inkwell.domain.value import PostId, PostSortOrder, UserId


class PostRepository(ABC):
    """Repository for Post aggregate."""

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(
        self,
        search: Optional[str] = None,
        author_id: Optional[UserId] = None,
        sort: PostSortOrder = PostSortOrder.LATEST,
        limit: int = 30,
        offset: int = 0,
    ) -> List[Post]:
        """Find posts with filtering and pagination.

        Args:
            search: Case-insensitive substring matched against title or content
            author_id: Only posts by this author
            sort: Sort order on updated_at
            limit: Maximum number of posts to return
            offset: Number of posts to skip

        Returns:
            List of posts matching the criteria
        """
        pass

    @abstractmethod
    async def count(
        self, search: Optional[str] = None, author_id: Optional[UserId] = None
    ) -> int:
        """Count posts matching the same filters as ``find_all``."""
        pass

    @abstractmethod
    async def save(self, post: Post) -> Post:
        """Save a post (create or update).

        Args:
            post: The post to save

        Returns:
            The saved post
        """
        pass

    @abstractmethod
    async def delete(self, post_id: PostId) -> bool:
        """Delete a post.

        Args:
            post_id: The post ID

        Returns:
            True if a row was deleted
        """
        pass

    @abstractmethod
    async def increment_view_count(self, post_id: PostId) -> None:
        """Atomically add one view to a post.

        Args:
            post_id: The post ID
        """
        pass
