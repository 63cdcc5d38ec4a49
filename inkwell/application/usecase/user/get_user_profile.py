"""Get user profile use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from inkwell.domain.model import User
from inkwell.domain.service import UserService
from inkwell.domain.value import UserId

from ..base import BaseUseCase


class UserProfile(BaseModel):
    """Public profile of a user."""

    user_id: str
    display_name: str
    introduce: str | None
    avatar_url: str | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserProfile":
        return cls(
            user_id=str(user.id),
            display_name=str(user.display_name),
            introduce=user.introduce,
            avatar_url=user.avatar_url,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class GetUserProfileRequest(BaseModel):
    """Get user profile request."""

    user_id: str  # UUID string


class GetUserProfileUseCase(BaseUseCase[GetUserProfileRequest, UserProfile]):
    """Use case for reading a user's public profile."""

    def __init__(self, user_service: UserService) -> None:
        """Initialize get user profile use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: GetUserProfileRequest) -> UserProfile:
        """Execute get user profile flow.

        Raises:
            NotFoundError: If the user has no profile
        """
        user = await self.user_service.get_by_id(UserId(UUID(request.user_id)))
        return UserProfile.from_user(user)
