"""Domain services."""

from .base import Service
from .cache_service import CacheClient, CommentCacheService
from .comment_service import CommentService
from .counter_service import CounterService
from .jwt_service import JWTService
from .thread_service import ThreadService
from .user_service import UserService
from .video_service import VideoService

__all__ = [
    "CacheClient",
    "CommentCacheService",
    "CommentService",
    "CounterService",
    "JWTService",
    "Service",
    "ThreadService",
    "UserService",
    "VideoService",
]
