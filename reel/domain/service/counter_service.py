"""Counter reconciliation service.

Keeps ``Video.stats.comments_count`` and ``Comment.stats.replies_count`` in
line with the stored comments. Single-document changes use atomic increments;
anything that touches several documents is followed by an exact recount.
"""

import logfire

from reel.domain.error import NotFoundError
from reel.domain.model.comment import Comment
from reel.domain.repository import CommentRepository, VideoRepository
from reel.domain.value import CommentId, VideoId

from .base import Service


class CounterService(Service):
    """Domain service for derived comment counters."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        video_repository: VideoRepository,
    ) -> None:
        """Initialize counter service.

        Args:
            comment_repository: Comment repository
            video_repository: Video repository
        """
        self.comment_repository = comment_repository
        self.video_repository = video_repository

    async def on_comment_created(self, comment: Comment) -> None:
        """Count a newly stored comment on its video and parent.

        Args:
            comment: The comment that was just saved
        """
        with logfire.span(
            "counter_service.on_comment_created",
            comment_id=str(comment.id),
            video_id=str(comment.video_id),
        ):
            await self.video_repository.increment_comments_count(comment.video_id, 1)
            if comment.parent_id:
                await self.comment_repository.increment_replies_count(
                    comment.parent_id, 1
                )
            logfire.info(
                "Counters incremented for new comment",
                comment_id=str(comment.id),
                is_reply=comment.parent_id is not None,
            )

    async def on_subtree_deleted(
        self,
        video_id: VideoId,
        parent_id: CommentId | None,
        deleted_count: int,
    ) -> None:
        """Update counters after a cascading delete.

        The video counter drops by exactly the number of removed comments.
        The former parent's reply counter is recounted rather than
        decremented.

        Args:
            video_id: Video the subtree belonged to
            parent_id: Parent of the deleted subtree root, if any
            deleted_count: Number of comments removed
        """
        with logfire.span(
            "counter_service.on_subtree_deleted",
            video_id=str(video_id),
            parent_id=str(parent_id) if parent_id else None,
            deleted_count=deleted_count,
        ):
            if deleted_count:
                await self.video_repository.increment_comments_count(
                    video_id, -deleted_count
                )
            if parent_id:
                await self.reconcile_comment(parent_id)

    async def reconcile_comment(self, comment_id: CommentId) -> int:
        """Recount a comment's direct replies and store the exact value.

        Args:
            comment_id: Comment to reconcile

        Returns:
            The recounted reply total
        """
        with logfire.span(
            "counter_service.reconcile_comment", comment_id=str(comment_id)
        ):
            remaining = await self.comment_repository.count_children(comment_id)
            await self.comment_repository.set_replies_count(comment_id, remaining)
            logfire.info(
                "Replies count reconciled",
                comment_id=str(comment_id),
                replies_count=remaining,
            )
            return remaining

    async def reconcile_video(self, video_id: VideoId) -> int:
        """Recount a video's comments and store the exact value.

        Used to repair drift left behind by interrupted writes.

        Args:
            video_id: Video to reconcile

        Returns:
            The recounted comment total

        Raises:
            NotFoundError: If the video does not exist
        """
        with logfire.span("counter_service.reconcile_video", video_id=str(video_id)):
            video = await self.video_repository.find_by_id(video_id)
            if not video:
                raise NotFoundError("Video", str(video_id))

            total = await self.comment_repository.count_by_video(video_id)
            if total != video.stats.comments_count:
                logfire.warn(
                    "Video comment counter drifted",
                    video_id=str(video_id),
                    stored=video.stats.comments_count,
                    actual=total,
                )
            await self.video_repository.set_comments_count(video_id, total)
            return total
