"""Get comments use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from inkwell.domain.model import Comment
from inkwell.domain.service import CommentService
from inkwell.domain.value import PostId

from ..base import BaseUseCase


class CommentItem(BaseModel):
    """Comment item in response."""

    comment_id: str
    post_id: str
    author_id: str
    author_name: str
    content: str
    parent_id: str | None
    created_at: datetime

    @classmethod
    def from_comment(cls, comment: Comment) -> "CommentItem":
        return cls(
            comment_id=str(comment.id),
            post_id=str(comment.post_id),
            author_id=str(comment.author_id),
            author_name=str(comment.author_name),
            content=comment.content,
            parent_id=str(comment.parent_id) if comment.parent_id else None,
            created_at=comment.created_at,
        )


class GetCommentsRequest(BaseModel):
    """Get comments request."""

    post_id: str  # UUID string


class GetCommentsResponse(BaseModel):
    """Get comments response."""

    post_id: str
    comments: list[CommentItem]
    total: int


class GetCommentsUseCase(BaseUseCase[GetCommentsRequest, GetCommentsResponse]):
    """Use case for listing the flat comments of a post, oldest first."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize get comments use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: GetCommentsRequest) -> GetCommentsResponse:
        """Execute get comments flow.

        Args:
            request: Get comments request with post ID

        Returns:
            Flat comments in creation order
        """
        post_id = PostId(UUID(request.post_id))
        comments = await self.comment_service.get_comments_for_post(post_id)

        return GetCommentsResponse(
            post_id=request.post_id,
            comments=[CommentItem.from_comment(c) for c in comments],
            total=len(comments),
        )
