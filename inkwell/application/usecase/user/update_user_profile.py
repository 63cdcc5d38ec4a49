"""Update user profile use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from inkwell.adapter.storage import ImageStore
from inkwell.config import StorageSettings
from inkwell.domain.service import UserService
from inkwell.domain.value import UserId
from inkwell.domain.value.types import DisplayName

from ..base import BaseUseCase
from ..image import store_image
from .get_user_profile import UserProfile


class UpdateUserProfileRequest(BaseModel):
    """Update user profile request."""

    user_id: str  # From authenticated user
    token_display_name: DisplayName  # From authenticated user, for new profiles
    display_name: DisplayName | None = None
    introduce: str | None = Field(default=None, max_length=300)
    avatar: str | None = None  # Base64 data URL


class UpdateUserProfileUseCase(BaseUseCase[UpdateUserProfileRequest, UserProfile]):
    """Use case for updating a user's profile.

    Users can change their display name, self-introduction and avatar.
    """

    def __init__(
        self,
        user_service: UserService,
        image_store: ImageStore,
        storage_settings: StorageSettings,
    ) -> None:
        """Initialize update user profile use case.

        Args:
            user_service: User domain service
            image_store: Storage for avatars
            storage_settings: Storage settings (image size limit)
        """
        self.user_service = user_service
        self.image_store = image_store
        self.storage_settings = storage_settings

    async def execute(self, request: UpdateUserProfileRequest) -> UserProfile:
        """Execute update user profile flow.

        Steps:
        1. Make sure the profile exists
        2. Upload the new avatar, if any
        3. Save changed fields

        Raises:
            ValidationError: If the avatar is rejected
        """
        user_id = UserId(UUID(request.user_id))
        await self.user_service.ensure_profile(user_id, request.token_display_name)

        avatar_url = None
        if request.avatar:
            avatar_url = await store_image(
                self.image_store,
                request.avatar,
                folder="avatars",
                max_bytes=self.storage_settings.max_image_bytes,
            )

        user = await self.user_service.update_profile(
            user_id,
            display_name=request.display_name,
            introduce=request.introduce,
            avatar_url=avatar_url,
        )
        return UserProfile.from_user(user)
