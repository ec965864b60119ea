"""Mock persistence providers for testing."""

from dishka import Scope, provide

from reel.domain.repository import CommentRepository, UserRepository, VideoRepository
from reel.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryUserRepository,
    InMemoryVideoRepository,
)
from reel.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Uses REQUEST scope to ensure test isolation - each test gets fresh repositories.
    """

    __is_mock__ = True

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self) -> UserRepository:
        """Provide in-memory user repository."""
        return InMemoryUserRepository()

    @provide(scope=Scope.REQUEST)
    def get_video_repository(self) -> VideoRepository:
        """Provide in-memory video repository."""
        return InMemoryVideoRepository()

    @provide(scope=Scope.REQUEST)
    def get_comment_repository(self) -> CommentRepository:
        """Provide in-memory comment repository."""
        return InMemoryCommentRepository()
