"""Get current user use case."""

from uuid import UUID

from pydantic import BaseModel

from inkwell.domain.service import JWTService, UserService
from inkwell.domain.value import UserId
from inkwell.domain.value.types import DisplayName

from ..base import BaseUseCase
from .get_user_profile import UserProfile


class GetCurrentUserRequest(BaseModel):
    """Get current user request."""

    token: str  # JWT token


class GetCurrentUserUseCase(BaseUseCase[GetCurrentUserRequest, UserProfile]):
    """Use case for resolving the authenticated user's profile.

    The first call for a new identity creates the profile from the token.
    """

    def __init__(self, jwt_service: JWTService, user_service: UserService) -> None:
        """Initialize get current user use case.

        Args:
            jwt_service: JWT token domain service
            user_service: User domain service
        """
        self.jwt_service = jwt_service
        self.user_service = user_service

    async def execute(self, request: GetCurrentUserRequest) -> UserProfile:
        """Execute get current user flow.

        Raises:
            JWTError: If token is invalid or expired
        """
        payload = self.jwt_service.verify_token(request.token)
        user = await self.user_service.ensure_profile(
            UserId(UUID(payload.user_id)), DisplayName(payload.display_name)
        )
        return UserProfile.from_user(user)
