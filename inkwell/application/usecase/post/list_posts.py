"""List posts use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from inkwell.domain.service import PostService
from inkwell.domain.service.markup import strip_markup
from inkwell.domain.service.thread_builder import make_snippet
from inkwell.domain.value import PostSortOrder, UserId

from ..base import BaseUseCase

EXCERPT_LENGTH = 200


class PostItem(BaseModel):
    """Post summary in a listing."""

    post_id: str
    author_id: str
    author_name: str
    title: str
    excerpt: str  # Plain text, markup removed
    image_url: str | None
    view_count: int
    created_at: datetime
    updated_at: datetime


class ListPostsRequest(BaseModel):
    """List posts request."""

    search: str | None = None
    author_id: str | None = None  # UUID string
    sort: PostSortOrder = PostSortOrder.LATEST
    limit: int = Field(default=30, ge=1, le=100)
    offset: int = Field(default=0, ge=0)


class ListPostsResponse(BaseModel):
    """List posts response."""

    posts: list[PostItem]
    total: int
    limit: int
    offset: int


class ListPostsUseCase(BaseUseCase[ListPostsRequest, ListPostsResponse]):
    """Use case for searching and paging through posts."""

    def __init__(self, post_service: PostService) -> None:
        """Initialize list posts use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: ListPostsRequest) -> ListPostsResponse:
        """Execute list posts flow.

        Args:
            request: Filters, sort order and page

        Returns:
            Page of post summaries and the total match count
        """
        posts, total = await self.post_service.list_posts(
            search=request.search,
            author_id=UserId(UUID(request.author_id)) if request.author_id else None,
            sort=request.sort,
            limit=request.limit,
            offset=request.offset,
        )

        items = [
            PostItem(
                post_id=str(post.id),
                author_id=str(post.author_id),
                author_name=str(post.author_name),
                title=post.title,
                excerpt=make_snippet(strip_markup(post.content), EXCERPT_LENGTH),
                image_url=post.image_url,
                view_count=post.view_count,
                created_at=post.created_at,
                updated_at=post.updated_at,
            )
            for post in posts
        ]

        return ListPostsResponse(
            posts=items, total=total, limit=request.limit, offset=request.offset
        )
