"""Reconcile video counters use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from reel.domain.error import NotAuthorizedError
from reel.domain.service import CommentCacheService, CounterService, UserService
from reel.domain.value import UserId, VideoId


class ReconcileCountersRequest(BaseModel):
    """Reconcile counters request."""

    video_id: str  # UUID string
    user_id: str  # Acting user, must be an admin


class ReconcileCountersResponse(BaseModel):
    """Reconcile counters response."""

    video_id: str
    comments_count: int


class ReconcileCountersUseCase:
    """Use case for repairing a video's comment counter from the stored rows.

    Multi-step writes are not transactional across the cache and the store,
    so an interrupted request can leave the counter off by a few. This
    recomputes it exactly.
    """

    def __init__(
        self,
        counter_service: CounterService,
        cache_service: CommentCacheService,
        user_service: UserService,
    ) -> None:
        self.counter_service = counter_service
        self.cache_service = cache_service
        self.user_service = user_service

    async def execute(
        self, request: ReconcileCountersRequest
    ) -> ReconcileCountersResponse:
        """Execute reconcile flow.

        Raises:
            NotAuthorizedError: If the user is not an admin
            NotFoundError: If the video does not exist
        """
        video_id = VideoId(UUID(request.video_id))
        user_id = UserId(UUID(request.user_id))

        actor = await self.user_service.get_user_by_id(user_id)
        if not actor or not actor.is_admin:
            logfire.warn(
                "Non-admin attempted counter reconciliation",
                video_id=str(video_id),
                user_id=str(user_id),
            )
            raise NotAuthorizedError("reconcile", "video", str(video_id), str(user_id))

        total = await self.counter_service.reconcile_video(video_id)
        await self.cache_service.invalidate_for_video(video_id)

        return ReconcileCountersResponse(video_id=str(video_id), comments_count=total)
