"""Repository interfaces for Reel domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from reel.domain.repository.comment import CommentRepository
from reel.domain.repository.user import UserRepository
from reel.domain.repository.video import VideoRepository

__all__ = [
    "CommentRepository",
    "UserRepository",
    "VideoRepository",
]
