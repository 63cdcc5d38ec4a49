"""In-memory user profiles for tests."""

from typing import Optional

from inkwell.domain.model.user import User
from inkwell.domain.repository.user import UserRepository
from inkwell.domain.value import UserId


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self.profiles: dict[UserId, User] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        return self.profiles.get(user_id)

    async def save(self, user: User) -> User:
        self.profiles[user.id] = user
        return user
