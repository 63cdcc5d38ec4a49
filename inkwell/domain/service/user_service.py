"""User domain service."""

from datetime import datetime, timezone

import logfire

from inkwell.domain.error import NotFoundError
from inkwell.domain.model import User
from inkwell.domain.repository import UserRepository
from inkwell.domain.value import UserId
from inkwell.domain.value.types import DisplayName

from .base import Service


class UserService(Service):
    """Domain service for user profiles."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User entity

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            logfire.info("User found", user_id=str(user_id))
            return user

    async def ensure_profile(self, user_id: UserId, display_name: DisplayName) -> User:
        """Get the profile of an authenticated user, creating it on first use.

        The identity service owns accounts; a profile row appears the first
        time a verified user touches the blog.

        Args:
            user_id: User ID from the verified token
            display_name: Display name from the verified token

        Returns:
            Existing or newly created profile
        """
        with logfire.span("user_service.ensure_profile", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if user:
                return user

            user = await self.user_repository.save(
                User(id=user_id, display_name=display_name)
            )
            logfire.info("User profile created", user_id=str(user_id))
            return user

    async def update_profile(
        self,
        user_id: UserId,
        display_name: DisplayName | None = None,
        introduce: str | None = None,
        avatar_url: str | None = None,
    ) -> User:
        """Update profile fields; None leaves a field unchanged.

        Args:
            user_id: User ID
            display_name: New display name
            introduce: New self-introduction
            avatar_url: New avatar URL

        Returns:
            Updated user

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.update_profile", user_id=str(user_id)):
            user = await self.get_by_id(user_id)

            changes: dict = {"updated_at": datetime.now(timezone.utc)}
            if display_name is not None:
                changes["display_name"] = display_name
            if introduce is not None:
                changes["introduce"] = introduce.strip() or None
            if avatar_url is not None:
                changes["avatar_url"] = avatar_url

            # model_copy skips validation, re-validate the merged profile
            updated = User.model_validate({**user.model_dump(), **changes})
            saved = await self.user_repository.save(updated)
            logfire.info(
                "User profile updated",
                user_id=str(user_id),
                fields=sorted(k for k in changes if k != "updated_at"),
            )
            return saved
