"""Update post use case."""

from uuid import UUID

from pydantic import BaseModel

from inkwell.adapter.storage import ImageStore
from inkwell.config import StorageSettings
from inkwell.domain.error import NotAuthorizedError, NotFoundError
from inkwell.domain.service import CommentService, PostService
from inkwell.domain.value import PostId, UserId

from ..base import BaseUseCase
from ..image import store_image
from .get_post import PostDetail


class UpdatePostRequest(BaseModel):
    """Update post request.

    Fields left as None keep their current value. ``image`` replaces the
    cover image, ``remove_image`` drops it.
    """

    post_id: str  # UUID string
    user_id: str  # Current user ID (must be author)
    title: str | None = None
    content: str | None = None
    image: str | None = None  # Base64 data URL
    remove_image: bool = False


class UpdatePostUseCase(BaseUseCase[UpdatePostRequest, PostDetail]):
    """Use case for editing one's own post."""

    def __init__(
        self,
        post_service: PostService,
        comment_service: CommentService,
        image_store: ImageStore,
        storage_settings: StorageSettings,
    ) -> None:
        """Initialize update post use case.

        Args:
            post_service: Post domain service
            comment_service: Comment domain service
            image_store: Storage for cover images
            storage_settings: Storage settings (image size limit)
        """
        self.post_service = post_service
        self.comment_service = comment_service
        self.image_store = image_store
        self.storage_settings = storage_settings

    async def execute(self, request: UpdatePostRequest) -> PostDetail:
        """Execute update post flow.

        Args:
            request: Update post request

        Returns:
            Updated post

        Raises:
            NotFoundError: If the post does not exist
            NotAuthorizedError: If the user is not the author
            ValidationError: If the new values are invalid
        """
        post_id = PostId(UUID(request.post_id))
        user_id = UserId(UUID(request.user_id))

        post = await self.post_service.get_post_by_id(post_id)
        if post is None:
            raise NotFoundError("Post", request.post_id)

        if post.author_id != user_id:
            raise NotAuthorizedError("post", request.post_id, request.user_id)

        image_url = post.image_url
        if request.remove_image:
            image_url = None
        if request.image:
            image_url = await store_image(
                self.image_store,
                request.image,
                folder="posts",
                max_bytes=self.storage_settings.max_image_bytes,
            )

        updated = await self.post_service.update_post(
            post,
            title=request.title if request.title is not None else post.title,
            content=request.content if request.content is not None else post.content,
            image_url=image_url,
        )

        comment_count = await self.comment_service.count_for_post(post_id)
        return PostDetail.from_post(updated, comment_count)
