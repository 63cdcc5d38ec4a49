"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from inkwell.domain.model.comment import Comment
from inkwell.domain.value import CommentId, PostId


class CommentRepository(ABC):
    """Repository for Comment entity.

    This is the Comment Store: a flat table of rows. Change notifications for
    the same rows are published on the ChangeFeed.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def list_by_post(self, post_id: PostId) -> List[Comment]:
        """List every comment of a post, oldest first.

        Ordered by (created_at, seq). No threading is applied here.

        Args:
            post_id: The post ID

        Returns:
            Flat list of comments
        """
        pass

    @abstractmethod
    async def insert(self, comment: Comment) -> Comment:
        """Persist a new comment.

        The store assigns ``seq``; the returned comment carries it.

        Args:
            comment: The comment to insert

        Returns:
            The stored comment
        """
        pass

    @abstractmethod
    async def delete(self, comment_id: CommentId) -> bool:
        """Delete a single comment (hard delete).

        Replies are left in place; they become orphans and are shown as
        top-level comments by the thread builder.

        Args:
            comment_id: The comment ID to delete

        Returns:
            True if a row was deleted
        """
        pass

    @abstractmethod
    async def delete_by_post(self, post_id: PostId) -> int:
        """Delete every comment of a post.

        Args:
            post_id: The post ID

        Returns:
            Number of deleted comments
        """
        pass

    @abstractmethod
    async def count_by_post(self, post_id: PostId) -> int:
        """Count comments for a post.

        Args:
            post_id: The post ID

        Returns:
            Number of comments
        """
        pass
