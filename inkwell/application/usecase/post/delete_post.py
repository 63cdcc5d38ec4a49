"""Delete post use case."""

from uuid import UUID

from pydantic import BaseModel

from inkwell.domain.error import NotAuthorizedError, NotFoundError
from inkwell.domain.service import CommentService, PostService
from inkwell.domain.value import PostId, UserId

from ..base import BaseUseCase


class DeletePostRequest(BaseModel):
    """Delete post request."""

    post_id: str  # UUID string
    user_id: str  # Current user ID (must be author)


class DeletePostResponse(BaseModel):
    """Delete post response."""

    post_id: str
    deleted_comments: int


class DeletePostUseCase(BaseUseCase[DeletePostRequest, DeletePostResponse]):
    """Use case for deleting one's own post together with its comments."""

    def __init__(
        self, post_service: PostService, comment_service: CommentService
    ) -> None:
        """Initialize delete post use case.

        Args:
            post_service: Post domain service
            comment_service: Comment domain service
        """
        self.post_service = post_service
        self.comment_service = comment_service

    async def execute(self, request: DeletePostRequest) -> DeletePostResponse:
        """Execute delete post flow.

        Comments are deleted first so live viewers get one change event per
        comment before the post disappears.

        Args:
            request: Delete post request

        Returns:
            Deleted post ID and number of comments removed with it

        Raises:
            NotFoundError: If the post does not exist
            NotAuthorizedError: If the user is not the author
        """
        post_id = PostId(UUID(request.post_id))

        post = await self.post_service.get_post_by_id(post_id)
        if post is None:
            raise NotFoundError("Post", request.post_id)

        if post.author_id != UserId(UUID(request.user_id)):
            raise NotAuthorizedError("post", request.post_id, request.user_id)

        deleted_comments = await self.comment_service.delete_comments_for_post(post_id)
        if not await self.post_service.delete_post(post_id):
            raise NotFoundError("Post", request.post_id)

        return DeletePostResponse(
            post_id=request.post_id, deleted_comments=deleted_comments
        )
