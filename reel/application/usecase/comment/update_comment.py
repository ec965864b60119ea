"""Update comment use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from reel.domain.error import NotAuthorizedError
from reel.domain.service import CommentCacheService, CommentService, UserService
from reel.domain.value import CommentId, UserId

from .common import CommentItem, to_comment_item


class UpdateCommentRequest(BaseModel):
    """Update comment request."""

    comment_id: str  # UUID string
    user_id: str  # User ID from authenticated user
    content: str


class UpdateCommentUseCase:
    """Use case for editing a comment's content."""

    def __init__(
        self,
        comment_service: CommentService,
        cache_service: CommentCacheService,
        user_service: UserService,
    ) -> None:
        """Initialize update comment use case.

        Args:
            comment_service: Comment domain service
            cache_service: Comment read cache
            user_service: Author lookups
        """
        self.comment_service = comment_service
        self.cache_service = cache_service
        self.user_service = user_service

    async def execute(self, request: UpdateCommentRequest) -> CommentItem:
        """Execute update comment flow.

        Only the author may edit. The previous text is kept in the edit
        history.

        Raises:
            NotFoundError: If the comment does not exist
            NotAuthorizedError: If the user is not the author
            ValidationError: If the new content is empty or too long
        """
        comment_id = CommentId(UUID(request.comment_id))
        user_id = UserId(UUID(request.user_id))

        comment = await self.comment_service.require_comment(comment_id)
        if comment.author_id != user_id:
            logfire.warn(
                "User attempted to edit another user's comment",
                comment_id=str(comment_id),
                user_id=str(user_id),
                author_id=str(comment.author_id),
            )
            raise NotAuthorizedError(
                "edit", "comment", str(comment_id), str(user_id)
            )

        updated = await self.comment_service.edit_comment(comment, request.content)
        await self.cache_service.invalidate_for_comment(updated)

        author = await self.user_service.get_user_by_id(updated.author_id)
        return to_comment_item(updated, author, viewer_id=user_id)
