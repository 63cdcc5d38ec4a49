"""Delete comment use case."""

from uuid import UUID

from pydantic import BaseModel

from inkwell.domain.error import NotFoundError
from inkwell.domain.service import CommentService
from inkwell.domain.value import CommentId, PostId, UserId

from ..base import BaseUseCase


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    post_id: str  # UUID string
    comment_id: str  # UUID string
    user_id: str  # Current user ID (must be author)


class DeleteCommentResponse(BaseModel):
    """Delete comment response."""

    comment_id: str
    post_id: str


class DeleteCommentUseCase(BaseUseCase[DeleteCommentRequest, DeleteCommentResponse]):
    """Use case for deleting one's own comment.

    Replies stay and are shown as top-level comments afterwards.
    """

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize delete comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete comment flow.

        Args:
            request: Delete comment request

        Returns:
            IDs of the deleted comment and its post

        Raises:
            NotFoundError: If the comment does not exist on this post
            NotAuthorizedError: If the user is not the author
        """
        post_id = PostId(UUID(request.post_id))
        comment_id = CommentId(UUID(request.comment_id))

        comment = await self.comment_service.get_comment_by_id(comment_id)
        if comment is None or comment.post_id != post_id:
            raise NotFoundError("Comment", request.comment_id)

        await self.comment_service.delete_comment(
            comment_id, UserId(UUID(request.user_id))
        )

        return DeleteCommentResponse(
            comment_id=request.comment_id, post_id=request.post_id
        )
