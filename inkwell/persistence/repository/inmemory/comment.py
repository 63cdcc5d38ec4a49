"""In-memory comment repository for testing."""

from itertools import count
from typing import Optional

from inkwell.domain.model import ChangeEvent
from inkwell.domain.model.comment import Comment
from inkwell.domain.repository.change_feed import ChangeFeed
from inkwell.domain.repository.comment import CommentRepository
from inkwell.domain.value import ChangeType, CommentId, PostId


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing.

    Plays the role of the database trigger too: every insert and delete is
    published on ``change_feed`` when one is given.
    """

    def __init__(self, change_feed: Optional[ChangeFeed] = None) -> None:
        self._comments: dict[CommentId, Comment] = {}
        self._seq = count(1)
        self.change_feed = change_feed

    async def _announce(self, change_type: ChangeType, comment: Comment) -> None:
        if self.change_feed is None:
            return
        await self.change_feed.publish(
            ChangeEvent(type=change_type, record_id=comment.id, post_id=comment.post_id)
        )

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def list_by_post(self, post_id: PostId) -> list[Comment]:
        """List every comment of a post, oldest first."""
        comments = [c for c in self._comments.values() if c.post_id == post_id]
        comments.sort(key=lambda c: (c.created_at, c.seq))
        return comments

    async def insert(self, comment: Comment) -> Comment:
        """Store a comment under the next sequence number."""
        stored = comment.model_copy(update={"seq": next(self._seq)})
        self._comments[stored.id] = stored
        await self._announce(ChangeType.INSERT, stored)
        return stored

    async def delete(self, comment_id: CommentId) -> bool:
        """Delete a comment."""
        comment = self._comments.pop(comment_id, None)
        if comment is None:
            return False
        await self._announce(ChangeType.DELETE, comment)
        return True

    async def delete_by_post(self, post_id: PostId) -> int:
        """Delete every comment of a post."""
        doomed = [c for c in self._comments.values() if c.post_id == post_id]
        for comment in doomed:
            del self._comments[comment.id]
        for comment in doomed:
            await self._announce(ChangeType.DELETE, comment)
        return len(doomed)

    async def count_by_post(self, post_id: PostId) -> int:
        """Count comments for a post."""
        return sum(1 for c in self._comments.values() if c.post_id == post_id)
