"""Domain layer DI providers."""

from dishka import Scope, provide

from reel.config import AuthSettings, CacheSettings, CommentSettings
from reel.domain.repository import CommentRepository, UserRepository, VideoRepository
from reel.domain.service import (
    CacheClient,
    CommentCacheService,
    CommentService,
    CounterService,
    JWTService,
    ThreadService,
    UserService,
    VideoService,
)
from reel.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_thread_service(
        self,
        comment_repository: CommentRepository,
        comment_settings: CommentSettings,
    ) -> ThreadService:
        """Provide thread materializer."""
        return ThreadService(
            comment_repository=comment_repository, comment_settings=comment_settings
        )

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        thread_service: ThreadService,
        comment_settings: CommentSettings,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            thread_service=thread_service,
            comment_settings=comment_settings,
        )

    @provide
    def get_counter_service(
        self,
        comment_repository: CommentRepository,
        video_repository: VideoRepository,
    ) -> CounterService:
        """Provide counter reconciliation service."""
        return CounterService(
            comment_repository=comment_repository, video_repository=video_repository
        )

    @provide
    def get_comment_cache_service(
        self, cache_client: CacheClient, cache_settings: CacheSettings
    ) -> CommentCacheService:
        """Provide comment read-cache service."""
        return CommentCacheService(
            cache_client=cache_client, cache_settings=cache_settings
        )

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_video_service(self, video_repository: VideoRepository) -> VideoService:
        """Provide video domain service."""
        return VideoService(video_repository=video_repository)
