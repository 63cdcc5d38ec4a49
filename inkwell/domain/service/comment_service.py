"""Comment domain service."""

from datetime import datetime, timezone
from uuid import uuid4

import logfire

from inkwell.config import CommentSettings
from inkwell.domain.error import NotAuthorizedError, NotFoundError, ValidationError
from inkwell.domain.model.comment import Comment
from inkwell.domain.repository import CommentRepository
from inkwell.domain.service.thread_builder import ThreadNode, build_thread
from inkwell.domain.value import CommentId, PostId, UserId
from inkwell.domain.value.types import DisplayName

from .base import Service


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(
        self, comment_repository: CommentRepository, settings: CommentSettings
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            settings: Comment settings (length and depth limits)
        """
        self.comment_repository = comment_repository
        self.settings = settings

    async def create_comment(
        self,
        post_id: PostId,
        author_id: UserId,
        author_name: DisplayName,
        content: str,
        parent_id: CommentId | None = None,
    ) -> Comment:
        """Create a comment on a post or a reply to another comment.

        Args:
            post_id: Post ID
            author_id: Author user ID
            author_name: Author display name
            content: Comment text
            parent_id: Comment being replied to (None for top-level)

        Returns:
            Stored comment

        Raises:
            ValidationError: If content is blank or too long, or the parent
                belongs to another post
            NotFoundError: If the parent comment does not exist
        """
        with logfire.span(
            "comment_service.create_comment",
            post_id=str(post_id),
            author_id=str(author_id),
            parent_id=str(parent_id) if parent_id else None,
        ):
            content = content.strip()
            if not content:
                raise ValidationError("Comment cannot be empty")
            if len(content) > self.settings.max_length:
                raise ValidationError(
                    f"Comment must be at most {self.settings.max_length} characters"
                )

            if parent_id:
                parent = await self.comment_repository.find_by_id(parent_id)
                if not parent:
                    logfire.warn(
                        "Parent comment not found",
                        parent_id=str(parent_id),
                        post_id=str(post_id),
                    )
                    raise NotFoundError("Comment", str(parent_id))
                if parent.post_id != post_id:
                    logfire.warn(
                        "Parent comment does not belong to post",
                        parent_id=str(parent_id),
                        parent_post_id=str(parent.post_id),
                        target_post_id=str(post_id),
                    )
                    raise ValidationError("Parent comment does not belong to this post")

            comment = Comment(
                id=CommentId(uuid4()),
                post_id=post_id,
                author_id=author_id,
                author_name=author_name,
                content=content,
                parent_id=parent_id,
                created_at=datetime.now(timezone.utc),
            )

            saved = await self.comment_repository.insert(comment)
            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                post_id=str(post_id),
                seq=saved.seq,
            )
            return saved

    async def get_comments_for_post(self, post_id: PostId) -> list[Comment]:
        """Get the flat comments of a post, oldest first.

        Args:
            post_id: Post ID

        Returns:
            Flat list of comments
        """
        with logfire.span(
            "comment_service.get_comments_for_post", post_id=str(post_id)
        ):
            comments = await self.comment_repository.list_by_post(post_id)
            logfire.info(
                "Comments retrieved for post",
                post_id=str(post_id),
                count=len(comments),
            )
            return comments

    async def get_thread(self, post_id: PostId) -> list[ThreadNode]:
        """Fetch the comments of a post and build its forest.

        Args:
            post_id: Post ID

        Returns:
            Root nodes of the thread
        """
        with logfire.span("comment_service.get_thread", post_id=str(post_id)):
            comments = await self.comment_repository.list_by_post(post_id)
            forest = build_thread(
                comments,
                max_depth=self.settings.max_depth,
                snippet_length=self.settings.snippet_length,
            )
            logfire.info(
                "Thread built",
                post_id=str(post_id),
                comments=len(comments),
                roots=len(forest),
            )
            return forest

    async def get_comment_by_id(self, comment_id: CommentId) -> Comment | None:
        """Get a comment by ID.

        Args:
            comment_id: Comment ID

        Returns:
            Comment if found, None otherwise
        """
        with logfire.span(
            "comment_service.get_comment_by_id", comment_id=str(comment_id)
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if comment:
                logfire.info("Comment found", comment_id=str(comment_id))
            else:
                logfire.warn("Comment not found", comment_id=str(comment_id))
            return comment

    async def delete_comment(
        self, comment_id: CommentId, acting_user_id: UserId
    ) -> Comment:
        """Delete a comment on behalf of its author.

        Replies of the deleted comment stay and surface as top-level comments.

        Args:
            comment_id: Comment ID
            acting_user_id: User requesting the deletion

        Returns:
            The deleted comment

        Raises:
            NotFoundError: If the comment does not exist
            NotAuthorizedError: If the acting user is not the author
        """
        with logfire.span(
            "comment_service.delete_comment",
            comment_id=str(comment_id),
            acting_user_id=str(acting_user_id),
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if comment is None:
                raise NotFoundError("Comment", str(comment_id))
            if comment.author_id != acting_user_id:
                logfire.warn(
                    "Comment deletion by non-author rejected",
                    comment_id=str(comment_id),
                    author_id=str(comment.author_id),
                    acting_user_id=str(acting_user_id),
                )
                raise NotAuthorizedError(
                    "comment", str(comment_id), str(acting_user_id)
                )

            deleted = await self.comment_repository.delete(comment_id)
            if not deleted:
                # Lost a race with another delete
                raise NotFoundError("Comment", str(comment_id))

            logfire.info(
                "Comment deleted",
                comment_id=str(comment_id),
                post_id=str(comment.post_id),
            )
            return comment

    async def delete_comments_for_post(self, post_id: PostId) -> int:
        """Delete every comment of a post.

        Args:
            post_id: Post ID

        Returns:
            Number of deleted comments
        """
        with logfire.span(
            "comment_service.delete_comments_for_post", post_id=str(post_id)
        ):
            count = await self.comment_repository.delete_by_post(post_id)
            logfire.info("Post comments deleted", post_id=str(post_id), count=count)
            return count

    async def count_for_post(self, post_id: PostId) -> int:
        """Number of comments on a post."""
        return await self.comment_repository.count_by_post(post_id)
