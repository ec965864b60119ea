"""Comment domain service."""

from datetime import datetime
from uuid import uuid4

import logfire

from reel.config import CommentSettings
from reel.domain.error import NotFoundError, ValidationError
from reel.domain.model.comment import Comment, validate_comment_content
from reel.domain.repository import CommentRepository
from reel.domain.value import CommentId, ReportReason, UserId, VideoId

from .base import Service
from .thread_service import ThreadService


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        thread_service: ThreadService,
        comment_settings: CommentSettings,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            thread_service: Thread materializer for nesting metadata
            comment_settings: Content and moderation rules
        """
        self.comment_repository = comment_repository
        self.thread_service = thread_service
        self.comment_settings = comment_settings

    def _clean_content(self, content: str) -> str:
        result = validate_comment_content(
            content, max_length=self.comment_settings.max_content_length
        )
        if not result.ok:
            logfire.warn(
                "Comment content rejected",
                errors=[e.message for e in result.errors],
            )
            raise ValidationError(result.errors)
        return content.strip()

    async def create_comment(
        self,
        video_id: VideoId,
        author_id: UserId,
        content: str,
        parent_id: CommentId | None = None,
        mentions: list[UserId] | None = None,
    ) -> Comment:
        """Create a comment on a video or a reply to another comment.

        Args:
            video_id: Video ID
            author_id: Author user ID
            content: Comment text (trimmed before storing)
            parent_id: Parent comment ID for replies (None for top-level)
            mentions: Users referenced by the comment

        Returns:
            Created comment with level and path set

        Raises:
            ValidationError: If the content is empty or too long
            NotFoundError: If the parent comment does not exist
            CrossVideoError: If the parent belongs to another video
            DepthLimitError: If the parent is already at the maximum level
        """
        with logfire.span(
            "comment_service.create_comment",
            video_id=str(video_id),
            author_id=str(author_id),
            parent_id=str(parent_id) if parent_id else None,
        ):
            text = self._clean_content(content)
            thread = await self.thread_service.prepare(video_id, parent_id)

            now = datetime.now()
            comment = Comment(
                id=CommentId(uuid4()),
                video_id=video_id,
                author_id=author_id,
                content=text,
                parent_id=parent_id,
                mentions=list(dict.fromkeys(mentions or [])),
                thread=thread,
                created_at=now,
                updated_at=now,
            )

            saved = await self.comment_repository.save(comment)
            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                video_id=str(video_id),
                level=thread.level,
            )
            return saved

    async def get_comment_by_id(self, comment_id: CommentId) -> Comment | None:
        """Get a comment by ID.

        Args:
            comment_id: Comment ID

        Returns:
            Comment if found, None otherwise
        """
        with logfire.span(
            "comment_service.get_comment_by_id", comment_id=str(comment_id)
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if comment:
                logfire.info("Comment found", comment_id=str(comment_id))
            else:
                logfire.warn("Comment not found", comment_id=str(comment_id))
            return comment

    async def require_comment(self, comment_id: CommentId) -> Comment:
        """Get a comment by ID or fail.

        Raises:
            NotFoundError: If the comment does not exist
        """
        comment = await self.get_comment_by_id(comment_id)
        if comment is None:
            raise NotFoundError("Comment", str(comment_id))
        return comment

    async def edit_comment(self, comment: Comment, content: str) -> Comment:
        """Replace a comment's content, keeping its edit history.

        Args:
            comment: Comment to edit
            content: New text

        Returns:
            Updated comment

        Raises:
            ValidationError: If the content is empty or too long
        """
        with logfire.span(
            "comment_service.edit_comment",
            comment_id=str(comment.id),
            content_length=len(content),
        ):
            text = self._clean_content(content)
            updated = await self.comment_repository.save(comment.edit(text))
            logfire.info(
                "Comment edited",
                comment_id=str(comment.id),
                versions=len(updated.edit_history),
            )
            return updated

    async def like_comment(self, comment: Comment, user_id: UserId) -> Comment:
        """Add a user's like. Already-liked comments are returned unchanged."""
        with logfire.span(
            "comment_service.like_comment",
            comment_id=str(comment.id),
            user_id=str(user_id),
        ):
            liked = await self.comment_repository.add_like(comment.id, user_id)
            return liked or comment

    async def unlike_comment(self, comment: Comment, user_id: UserId) -> Comment:
        """Remove a user's like. Comments the user never liked are unchanged."""
        with logfire.span(
            "comment_service.unlike_comment",
            comment_id=str(comment.id),
            user_id=str(user_id),
        ):
            unliked = await self.comment_repository.remove_like(comment.id, user_id)
            return unliked or comment

    async def toggle_like(
        self, comment: Comment, user_id: UserId
    ) -> tuple[Comment, bool]:
        """Like the comment if the user hasn't yet, otherwise unlike it.

        Returns:
            Updated comment and whether the user now likes it
        """
        if comment.is_liked_by(user_id):
            return await self.unlike_comment(comment, user_id), False
        return await self.like_comment(comment, user_id), True

    async def report_comment(
        self, comment: Comment, reason: ReportReason
    ) -> tuple[Comment, bool]:
        """Flag a comment for moderation.

        Args:
            comment: Comment being reported
            reason: Report reason

        Returns:
            The comment and whether a new flag was recorded
        """
        with logfire.span(
            "comment_service.report_comment",
            comment_id=str(comment.id),
            reason=reason.value,
        ):
            flagged = comment.add_flag(
                reason, threshold=self.comment_settings.auto_moderation_threshold
            )
            if flagged is comment:
                logfire.info(
                    "Duplicate report reason ignored",
                    comment_id=str(comment.id),
                    reason=reason.value,
                )
                return comment, False

            saved = await self.comment_repository.save(flagged)
            if saved.moderation.status != comment.moderation.status:
                logfire.warn(
                    "Comment auto-moderated",
                    comment_id=str(comment.id),
                    reports_count=saved.stats.reports_count,
                    status=saved.moderation.status.value,
                )
            return saved, True

    async def delete_thread(self, comment: Comment) -> list[CommentId]:
        """Delete a comment together with all of its descendants.

        Args:
            comment: Root of the subtree to delete

        Returns:
            IDs of the comments removed
        """
        with logfire.span(
            "comment_service.delete_thread",
            comment_id=str(comment.id),
            video_id=str(comment.video_id),
        ):
            deleted = await self.comment_repository.delete_subtree(comment.id)
            logfire.info(
                "Comment subtree deleted",
                comment_id=str(comment.id),
                deleted_count=len(deleted),
            )
            return deleted
