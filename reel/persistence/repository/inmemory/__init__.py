"""In-memory repository implementations for testing."""

from .comment import InMemoryCommentRepository
from .user import InMemoryUserRepository
from .video import InMemoryVideoRepository

__all__ = [
    "InMemoryCommentRepository",
    "InMemoryUserRepository",
    "InMemoryVideoRepository",
]
