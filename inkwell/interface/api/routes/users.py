"""User profile routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, status
from pydantic import BaseModel, Field

from inkwell.application.usecase.user import (
    GetCurrentUserRequest,
    GetCurrentUserUseCase,
    GetUserProfileRequest,
    GetUserProfileUseCase,
    UpdateUserProfileRequest,
    UpdateUserProfileUseCase,
    UserProfile,
)
from inkwell.domain.service import JWTService
from inkwell.interface.api.auth import require_user
from inkwell.interface.error import to_http_exception

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


class UpdateUserProfileAPIRequest(BaseModel):
    """API request for updating the current user's profile."""

    display_name: str | None = Field(default=None, min_length=1, max_length=50)
    introduce: str | None = Field(default=None, max_length=300)
    avatar: str | None = None  # data:image/...;base64,...


@router.get("/me", response_model=UserProfile)
async def get_me(
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> UserProfile:
    """Profile of the authenticated user, created on first visit.

    Args:
        get_current_user_use_case: Get current user use case from DI
        auth_token: JWT token from cookie

    Returns:
        Current user's profile
    """
    if not auth_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )

    try:
        return await get_current_user_use_case.execute(
            GetCurrentUserRequest(token=auth_token)
        )
    except Exception as e:
        raise to_http_exception(e, "load profile") from e


@router.patch("/me", response_model=UserProfile)
async def update_my_profile(
    request: UpdateUserProfileAPIRequest,
    update_user_profile_use_case: FromDishka[UpdateUserProfileUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> UserProfile:
    """Update the authenticated user's profile.

    Args:
        request: Fields to change
        update_user_profile_use_case: Update user profile use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        Updated profile
    """
    user = require_user(jwt_service, auth_token, "update profile")

    try:
        return await update_user_profile_use_case.execute(
            UpdateUserProfileRequest(
                user_id=user.user_id,
                token_display_name=user.display_name,
                display_name=request.display_name,
                introduce=request.introduce,
                avatar=request.avatar,
            )
        )
    except Exception as e:
        raise to_http_exception(e, "update profile") from e


@router.get("/{user_id}", response_model=UserProfile)
async def get_user_profile(
    user_id: UUID,
    get_user_profile_use_case: FromDishka[GetUserProfileUseCase],
) -> UserProfile:
    """Get a user's public profile.

    Args:
        user_id: User UUID
        get_user_profile_use_case: Get user profile use case from DI

    Returns:
        User profile
    """
    try:
        return await get_user_profile_use_case.execute(
            GetUserProfileRequest(user_id=str(user_id))
        )
    except Exception as e:
        raise to_http_exception(e, "load profile") from e
