"""Create post use case."""

from uuid import UUID

from pydantic import BaseModel

from inkwell.adapter.storage import ImageStore
from inkwell.config import StorageSettings
from inkwell.domain.service import PostService, UserService
from inkwell.domain.value import UserId
from inkwell.domain.value.types import DisplayName

from ..base import BaseUseCase
from ..image import store_image
from .get_post import PostDetail


class CreatePostRequest(BaseModel):
    """Create post request."""

    author_id: str  # User ID from authenticated user
    author_name: DisplayName  # Display name from authenticated user
    title: str
    content: str
    image: str | None = None  # Cover image as a base64 data URL


class CreatePostUseCase(BaseUseCase[CreatePostRequest, PostDetail]):
    """Use case for publishing a new blog post."""

    def __init__(
        self,
        post_service: PostService,
        user_service: UserService,
        image_store: ImageStore,
        storage_settings: StorageSettings,
    ) -> None:
        """Initialize create post use case.

        Args:
            post_service: Post domain service
            user_service: User domain service
            image_store: Storage for cover images
            storage_settings: Storage settings (image size limit)
        """
        self.post_service = post_service
        self.user_service = user_service
        self.image_store = image_store
        self.storage_settings = storage_settings

    async def execute(self, request: CreatePostRequest) -> PostDetail:
        """Execute create post flow.

        Steps:
        1. Make sure the author has a profile
        2. Upload the cover image, if any
        3. Save the post

        Args:
            request: Create post request

        Returns:
            The new post

        Raises:
            ValidationError: If title, content or image is invalid
            ProviderError: If the image store fails
        """
        author = await self.user_service.ensure_profile(
            UserId(UUID(request.author_id)), request.author_name
        )

        image_url = None
        if request.image:
            image_url = await store_image(
                self.image_store,
                request.image,
                folder="posts",
                max_bytes=self.storage_settings.max_image_bytes,
            )

        post = await self.post_service.create_post(
            author_id=author.id,
            author_name=author.display_name,
            title=request.title,
            content=request.content,
            image_url=image_url,
        )
        return PostDetail.from_post(post, comment_count=0)
