"""User entity (author perspective)."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from reel.domain.model.common import DomainModel
from reel.domain.value import UserId, UserRole


class User(DomainModel):
    """User account as seen by the comment core.

    Registration and credentials are handled by the account service.
    """

    id: UserId
    username: str = Field(min_length=1, max_length=50)
    display_name: Optional[str] = Field(default=None, max_length=100)
    avatar_url: Optional[str] = None
    role: UserRole = UserRole.USER
    is_active: bool = True
    created_at: datetime = Field(default_factory=datetime.now)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
