"""PostgreSQL repository implementations."""

from reel.persistence.repository.comment import PostgresCommentRepository
from reel.persistence.repository.user import PostgresUserRepository
from reel.persistence.repository.video import PostgresVideoRepository

__all__ = [
    "PostgresCommentRepository",
    "PostgresUserRepository",
    "PostgresVideoRepository",
]
