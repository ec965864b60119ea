"""In-memory user repository."""

from typing import Optional

from reel.domain.model.user import User
from reel.domain.repository.user import UserRepository
from reel.domain.value import UserId


class InMemoryUserRepository(UserRepository):
    """Dict-backed UserRepository for unit tests."""

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        return self._users.get(user_id)

    async def find_by_ids(self, user_ids: list[UserId]) -> list[User]:
        found = (self._users.get(user_id) for user_id in dict.fromkeys(user_ids))
        return [user for user in found if user is not None]

    async def save(self, user: User) -> User:
        self._users[user.id] = user
        return user
