"""Create comment use case."""

from uuid import UUID

from pydantic import BaseModel

from inkwell.domain.error import NotFoundError
from inkwell.domain.service import CommentService, PostService, UserService
from inkwell.domain.value import CommentId, PostId, UserId
from inkwell.domain.value.types import DisplayName

from ..base import BaseUseCase
from .get_comments import CommentItem


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    post_id: str  # UUID string
    content: str
    author_id: str  # User ID from authenticated user
    author_name: DisplayName  # Display name from authenticated user
    parent_id: str | None = None  # Parent comment ID for replies


class CreateCommentUseCase(BaseUseCase[CreateCommentRequest, CommentItem]):
    """Use case for creating a comment on a post or replying to another comment."""

    def __init__(
        self,
        comment_service: CommentService,
        post_service: PostService,
        user_service: UserService,
    ) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
            post_service: Post domain service
            user_service: User domain service
        """
        self.comment_service = comment_service
        self.post_service = post_service
        self.user_service = user_service

    async def execute(self, request: CreateCommentRequest) -> CommentItem:
        """Execute create comment flow.

        Steps:
        1. Verify post exists
        2. Make sure the author has a profile
        3. Create comment via comment service (validates parent if replying)

        Args:
            request: Create comment request

        Returns:
            The stored comment

        Raises:
            NotFoundError: If the post or parent comment does not exist
            ValidationError: If content or parent is invalid
        """
        post_id = PostId(UUID(request.post_id))
        author_id = UserId(UUID(request.author_id))

        post = await self.post_service.get_post_by_id(post_id)
        if not post:
            raise NotFoundError("Post", request.post_id)

        author = await self.user_service.ensure_profile(author_id, request.author_name)

        comment = await self.comment_service.create_comment(
            post_id=post_id,
            author_id=author.id,
            author_name=author.display_name,
            content=request.content,
            parent_id=CommentId(UUID(request.parent_id)) if request.parent_id else None,
        )

        return CommentItem.from_comment(comment)
