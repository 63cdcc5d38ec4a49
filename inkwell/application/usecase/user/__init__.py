"""User use cases."""

from .get_current_user import GetCurrentUserRequest, GetCurrentUserUseCase
from .get_user_profile import GetUserProfileRequest, GetUserProfileUseCase, UserProfile
from .update_user_profile import UpdateUserProfileRequest, UpdateUserProfileUseCase

__all__ = [
    "GetCurrentUserRequest",
    "GetCurrentUserUseCase",
    "GetUserProfileRequest",
    "GetUserProfileUseCase",
    "UpdateUserProfileRequest",
    "UpdateUserProfileUseCase",
    "UserProfile",
]
