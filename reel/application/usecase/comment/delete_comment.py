"""Delete comment use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from reel.domain.error import NotAuthorizedError
from reel.domain.service import (
    CommentCacheService,
    CommentService,
    CounterService,
    UserService,
)
from reel.domain.value import CommentId, UserId


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: str  # UUID string
    user_id: str  # User ID from authenticated user


class DeleteCommentResponse(BaseModel):
    """Delete comment response."""

    comment_id: str
    deleted_count: int


class DeleteCommentUseCase:
    """Use case for deleting a comment together with all of its replies."""

    def __init__(
        self,
        comment_service: CommentService,
        counter_service: CounterService,
        cache_service: CommentCacheService,
        user_service: UserService,
    ) -> None:
        self.comment_service = comment_service
        self.counter_service = counter_service
        self.cache_service = cache_service
        self.user_service = user_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete comment flow.

        The author or an admin may delete. Every descendant goes with the
        comment, the video counter drops by the number removed and the
        former parent's reply counter is recounted.

        Raises:
            NotFoundError: If the comment does not exist
            NotAuthorizedError: If the user is neither the author nor an admin
        """
        comment_id = CommentId(UUID(request.comment_id))
        user_id = UserId(UUID(request.user_id))

        comment = await self.comment_service.require_comment(comment_id)
        if comment.author_id != user_id:
            actor = await self.user_service.get_user_by_id(user_id)
            if not actor or not actor.is_admin:
                logfire.warn(
                    "User attempted to delete another user's comment",
                    comment_id=str(comment_id),
                    user_id=str(user_id),
                )
                raise NotAuthorizedError(
                    "delete", "comment", str(comment_id), str(user_id)
                )

        deleted_ids = await self.comment_service.delete_thread(comment)
        await self.counter_service.on_subtree_deleted(
            comment.video_id, comment.parent_id, len(deleted_ids)
        )
        await self.cache_service.invalidate_for_comment(comment)
        # Threads rooted anywhere inside the removed subtree
        for deleted_id in deleted_ids:
            await self.cache_service.invalidate_for_thread(deleted_id)

        return DeleteCommentResponse(
            comment_id=str(comment_id), deleted_count=len(deleted_ids)
        )
