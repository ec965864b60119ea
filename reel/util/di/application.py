"""Application layer DI providers."""

from dishka import Scope, provide

from reel.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
    GetCommentThreadUseCase,
    GetUserCommentsUseCase,
    GetVideoCommentsUseCase,
    ReportCommentUseCase,
    ToggleLikeUseCase,
    UpdateCommentUseCase,
)
from reel.application.usecase.video import ReconcileCountersUseCase
from reel.domain.service import (
    CommentCacheService,
    CommentService,
    CounterService,
    JWTService,
    ThreadService,
    UserService,
    VideoService,
)
from reel.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Comment read use cases
    @provide(scope=Scope.REQUEST)
    def get_get_video_comments_use_case(
        self,
        thread_service: ThreadService,
        video_service: VideoService,
        user_service: UserService,
        cache_service: CommentCacheService,
        jwt_service: JWTService,
    ) -> GetVideoCommentsUseCase:
        """Provide get video comments use case."""
        return GetVideoCommentsUseCase(
            thread_service=thread_service,
            video_service=video_service,
            user_service=user_service,
            cache_service=cache_service,
            jwt_service=jwt_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_comment_thread_use_case(
        self,
        thread_service: ThreadService,
        user_service: UserService,
        cache_service: CommentCacheService,
        jwt_service: JWTService,
    ) -> GetCommentThreadUseCase:
        """Provide get comment thread use case."""
        return GetCommentThreadUseCase(
            thread_service=thread_service,
            user_service=user_service,
            cache_service=cache_service,
            jwt_service=jwt_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_user_comments_use_case(
        self,
        thread_service: ThreadService,
        user_service: UserService,
        jwt_service: JWTService,
    ) -> GetUserCommentsUseCase:
        """Provide get user comments use case."""
        return GetUserCommentsUseCase(
            thread_service=thread_service,
            user_service=user_service,
            jwt_service=jwt_service,
        )

    # Comment write use cases
    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self,
        comment_service: CommentService,
        counter_service: CounterService,
        cache_service: CommentCacheService,
        video_service: VideoService,
        user_service: UserService,
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(
            comment_service=comment_service,
            counter_service=counter_service,
            cache_service=cache_service,
            video_service=video_service,
            user_service=user_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_update_comment_use_case(
        self,
        comment_service: CommentService,
        cache_service: CommentCacheService,
        user_service: UserService,
    ) -> UpdateCommentUseCase:
        """Provide update comment use case."""
        return UpdateCommentUseCase(
            comment_service=comment_service,
            cache_service=cache_service,
            user_service=user_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self,
        comment_service: CommentService,
        counter_service: CounterService,
        cache_service: CommentCacheService,
        user_service: UserService,
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(
            comment_service=comment_service,
            counter_service=counter_service,
            cache_service=cache_service,
            user_service=user_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_toggle_like_use_case(
        self, comment_service: CommentService, cache_service: CommentCacheService
    ) -> ToggleLikeUseCase:
        """Provide toggle like use case."""
        return ToggleLikeUseCase(
            comment_service=comment_service, cache_service=cache_service
        )

    @provide(scope=Scope.REQUEST)
    def get_report_comment_use_case(
        self, comment_service: CommentService, cache_service: CommentCacheService
    ) -> ReportCommentUseCase:
        """Provide report comment use case."""
        return ReportCommentUseCase(
            comment_service=comment_service, cache_service=cache_service
        )

    # Video use cases
    @provide(scope=Scope.REQUEST)
    def get_reconcile_counters_use_case(
        self,
        counter_service: CounterService,
        cache_service: CommentCacheService,
        user_service: UserService,
    ) -> ReconcileCountersUseCase:
        """Provide reconcile counters use case."""
        return ReconcileCountersUseCase(
            counter_service=counter_service,
            cache_service=cache_service,
            user_service=user_service,
        )
