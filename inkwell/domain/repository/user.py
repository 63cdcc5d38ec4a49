"""User profile repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from inkwell.domain.model.user import User
from inkwell.domain.value import UserId


class UserRepository(ABC):
    """Blog-side profiles of users owned by the identity service.

    Profiles are keyed by the identity service's user id and are never
    deleted from the blog.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Profile of ``user_id``, or None before the user's first visit."""
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Insert or replace a profile and return what was stored."""
        pass
