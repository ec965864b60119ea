"""Toggle like use case."""

from uuid import UUID

from pydantic import BaseModel

from reel.domain.service import CommentCacheService, CommentService
from reel.domain.value import CommentId, UserId


class ToggleLikeRequest(BaseModel):
    """Toggle like request."""

    comment_id: str  # UUID string
    user_id: str  # User ID from authenticated user


class ToggleLikeResponse(BaseModel):
    """Toggle like response."""

    comment_id: str
    is_liked: bool
    likes_count: int


class ToggleLikeUseCase:
    """Use case for liking a comment, or unliking it if already liked."""

    def __init__(
        self, comment_service: CommentService, cache_service: CommentCacheService
    ) -> None:
        self.comment_service = comment_service
        self.cache_service = cache_service

    async def execute(self, request: ToggleLikeRequest) -> ToggleLikeResponse:
        """Execute toggle like flow.

        Raises:
            NotFoundError: If the comment does not exist
        """
        comment = await self.comment_service.require_comment(
            CommentId(UUID(request.comment_id))
        )
        updated, is_liked = await self.comment_service.toggle_like(
            comment, UserId(UUID(request.user_id))
        )
        await self.cache_service.invalidate_for_comment(updated)

        return ToggleLikeResponse(
            comment_id=str(updated.id),
            is_liked=is_liked,
            likes_count=updated.stats.likes_count,
        )
