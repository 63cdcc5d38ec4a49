"""Get post use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from inkwell.domain.error import NotFoundError
from inkwell.domain.model import Post
from inkwell.domain.service import CommentService, PostService
from inkwell.domain.service.markup import render_html
from inkwell.domain.value import PostId

from ..base import BaseUseCase


class PostDetail(BaseModel):
    """Full post as shown on its own page."""

    post_id: str
    author_id: str
    author_name: str
    title: str
    content: str  # Markup source, for the editor
    content_html: str  # Rendered, escaped HTML
    image_url: str | None
    view_count: int
    comment_count: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_post(cls, post: Post, comment_count: int) -> "PostDetail":
        return cls(
            post_id=str(post.id),
            author_id=str(post.author_id),
            author_name=str(post.author_name),
            title=post.title,
            content=post.content,
            content_html=render_html(post.content),
            image_url=post.image_url,
            view_count=post.view_count,
            comment_count=comment_count,
            created_at=post.created_at,
            updated_at=post.updated_at,
        )


class GetPostRequest(BaseModel):
    """Get post request."""

    post_id: str  # UUID string
    record_view: bool = True


class GetPostUseCase(BaseUseCase[GetPostRequest, PostDetail]):
    """Use case for reading a single post; each read counts as a view."""

    def __init__(
        self, post_service: PostService, comment_service: CommentService
    ) -> None:
        """Initialize get post use case.

        Args:
            post_service: Post domain service
            comment_service: Comment domain service
        """
        self.post_service = post_service
        self.comment_service = comment_service

    async def execute(self, request: GetPostRequest) -> PostDetail:
        """Execute get post flow.

        Args:
            request: Get post request

        Returns:
            Post with rendered content

        Raises:
            NotFoundError: If the post does not exist
        """
        post_id = PostId(UUID(request.post_id))

        if request.record_view:
            await self.post_service.record_view(post_id)

        post = await self.post_service.get_post_by_id(post_id)
        if not post:
            raise NotFoundError("Post", request.post_id)

        comment_count = await self.comment_service.count_for_post(post_id)
        return PostDetail.from_post(post, comment_count)
