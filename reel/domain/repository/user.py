"""User repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from reel.domain.model.user import User
from reel.domain.value import UserId


class UserRepository(ABC):
    """Repository for User entity."""

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        pass

    @abstractmethod
    async def find_by_ids(self, user_ids: List[UserId]) -> List[User]:
        """Find several users at once. Unknown IDs are skipped."""
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update)."""
        pass
