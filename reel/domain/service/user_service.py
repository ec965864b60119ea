"""User domain service."""

import logfire

from reel.domain.model.user import User
from reel.domain.repository import UserRepository
from reel.domain.value import UserId

from .base import Service


class UserService(Service):
    """Domain service for resolving comment authors and acting users."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def get_user_by_id(self, user_id: UserId) -> User | None:
        """Get a user by ID.

        Args:
            user_id: User ID

        Returns:
            User if found, None otherwise
        """
        with logfire.span("user_service.get_user_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
            return user

    async def get_users_by_ids(self, user_ids: list[UserId]) -> dict[UserId, User]:
        """Batch-load users, keyed by ID.

        Args:
            user_ids: User IDs (duplicates allowed)

        Returns:
            Mapping of the IDs that exist to their users
        """
        unique_ids = list(dict.fromkeys(user_ids))
        if not unique_ids:
            return {}
        users = await self.user_repository.find_by_ids(unique_ids)
        return {user.id: user for user in users}
