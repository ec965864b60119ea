"""Report comment use case."""

from uuid import UUID

from pydantic import BaseModel

from reel.domain.service import CommentCacheService, CommentService
from reel.domain.value import CommentId, ReportReason


class ReportCommentRequest(BaseModel):
    """Report comment request."""

    comment_id: str  # UUID string
    user_id: str  # Reporter, from the authenticated user
    reason: ReportReason


class ReportCommentResponse(BaseModel):
    """Report comment response."""

    comment_id: str
    message: str


class ReportCommentUseCase:
    """Use case for flagging a comment for moderation."""

    def __init__(
        self, comment_service: CommentService, cache_service: CommentCacheService
    ) -> None:
        self.comment_service = comment_service
        self.cache_service = cache_service

    async def execute(self, request: ReportCommentRequest) -> ReportCommentResponse:
        """Execute report flow.

        Each reason is recorded once per comment. A comment that collects
        enough distinct reasons is hidden pending review, so its cached views
        are purged.

        Raises:
            NotFoundError: If the comment does not exist
        """
        comment = await self.comment_service.require_comment(
            CommentId(UUID(request.comment_id))
        )
        updated, flagged = await self.comment_service.report_comment(
            comment, request.reason
        )
        if flagged:
            await self.cache_service.invalidate_for_comment(updated)

        return ReportCommentResponse(
            comment_id=str(updated.id),
            message="Comment reported successfully",
        )
