"""Thread materializer.

Assigns nesting metadata when a comment is created and answers subtree and
listing queries from the stored ``(level, path)`` pair, without walking the
tree at read time.
"""

import logfire

from reel.config import CommentSettings
from reel.domain.error import CrossVideoError, DepthLimitError, NotFoundError
from reel.domain.model.comment import Comment
from reel.domain.model.thread import (
    CommentListOptions,
    CommentNode,
    CommentPage,
    CommentThread,
    Pagination,
    ThreadOptions,
    UserCommentListOptions,
)
from reel.domain.repository import CommentRepository
from reel.domain.value import CommentId, ThreadInfo, UserId, VideoId

from .base import Service


class ThreadService(Service):
    """Domain service for comment nesting and tree reads."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        comment_settings: CommentSettings,
    ) -> None:
        """Initialize thread service.

        Args:
            comment_repository: Comment repository
            comment_settings: Nesting and paging limits
        """
        self.comment_repository = comment_repository
        self.comment_settings = comment_settings

    def list_options(self, options: CommentListOptions) -> CommentListOptions:
        """Clamp a listing request to the configured maximum page size."""
        limit = min(options.limit, self.comment_settings.max_page_size)
        return options.model_copy(update={"limit": limit})

    def thread_limit(self, limit: int | None) -> int:
        """Resolve a requested thread size against the configured bounds."""
        if limit is None:
            limit = self.comment_settings.default_thread_limit
        return min(limit, self.comment_settings.max_thread_limit)

    async def prepare(
        self, video_id: VideoId, parent_id: CommentId | None
    ) -> ThreadInfo:
        """Compute level and path for a new comment.

        Args:
            video_id: Video the new comment is posted on
            parent_id: Comment being replied to (None for top-level)

        Returns:
            Nesting metadata for the new comment

        Raises:
            NotFoundError: If the parent does not exist
            CrossVideoError: If the parent belongs to another video
            DepthLimitError: If the parent is already at the maximum level
        """
        if parent_id is None:
            return ThreadInfo(level=0, path="")

        with logfire.span(
            "thread_service.prepare",
            video_id=str(video_id),
            parent_id=str(parent_id),
        ):
            parent = await self.comment_repository.find_by_id(parent_id)
            if not parent:
                logfire.warn("Parent comment not found", parent_id=str(parent_id))
                raise NotFoundError("Parent comment", str(parent_id))
            if parent.video_id != video_id:
                logfire.warn(
                    "Parent comment does not belong to video",
                    parent_id=str(parent_id),
                    parent_video_id=str(parent.video_id),
                    target_video_id=str(video_id),
                )
                raise CrossVideoError(str(parent_id), str(video_id))
            if parent.thread.level >= self.comment_settings.max_depth:
                logfire.warn(
                    "Reply rejected at depth limit",
                    parent_id=str(parent_id),
                    parent_level=parent.thread.level,
                )
                raise DepthLimitError(str(parent_id), self.comment_settings.max_depth)

            path = (
                f"{parent.thread.path}/{parent_id}"
                if parent.thread.path
                else f"/{parent_id}"
            )
            return ThreadInfo(level=parent.thread.level + 1, path=path)

    async def get_thread(self, root_id: CommentId, options: ThreadOptions) -> CommentThread:
        """Get a comment and its approved descendants.

        Ordered by level then creation time, which yields a top-down,
        chronological walk. The result is cut at the (clamped) limit, so a
        deep thread may come back with some subtrees missing.

        Args:
            root_id: Root comment ID
            options: Thread options

        Returns:
            The thread; empty if the root does not exist
        """
        limit = self.thread_limit(options.limit)
        with logfire.span("thread_service.get_thread", root_id=str(root_id), limit=limit):
            comments = await self.comment_repository.find_thread(root_id, limit)
            logfire.info(
                "Thread retrieved", root_id=str(root_id), count=len(comments)
            )
            return CommentThread(
                root_id=root_id,
                comments=[CommentNode(comment=c) for c in comments],
            )

    async def get_video_comments(
        self, video_id: VideoId, options: CommentListOptions
    ) -> CommentPage:
        """Get one page of a video's top-level comments with reply previews.

        Args:
            video_id: Video ID
            options: Paging and sorting options

        Returns:
            Page of top-level comments, each with up to
            ``preview_replies`` approved replies
        """
        limit = self.list_options(options).limit
        with logfire.span(
            "thread_service.get_video_comments",
            video_id=str(video_id),
            page=options.page,
            limit=limit,
            sort_by=options.sort_by.value,
            sort_order=options.sort_order.value,
        ):
            top_level = await self.comment_repository.find_top_level(
                video_id=video_id,
                sort_by=options.sort_by,
                sort_order=options.sort_order,
                limit=limit,
                offset=(options.page - 1) * limit,
            )
            total = await self.comment_repository.count_top_level(video_id)

            previews: dict[CommentId, list[Comment]] = {}
            if top_level and self.comment_settings.preview_replies > 0:
                previews = await self.comment_repository.find_reply_previews(
                    parent_ids=[c.id for c in top_level],
                    per_parent=self.comment_settings.preview_replies,
                    newest_first=self.comment_settings.preview_order == "newest",
                )

            nodes = [
                CommentNode(
                    comment=comment,
                    replies=[
                        CommentNode(comment=reply)
                        for reply in previews.get(comment.id, [])
                    ],
                )
                for comment in top_level
            ]
            logfire.info(
                "Video comments retrieved",
                video_id=str(video_id),
                count=len(nodes),
                total=total,
            )
            return CommentPage(
                video_id=video_id,
                comments=nodes,
                pagination=Pagination.build(options.page, limit, total),
            )

    async def get_user_comments(
        self, author_id: UserId, options: UserCommentListOptions
    ) -> tuple[list[Comment], Pagination]:
        """Get one page of an author's approved comments, newest first.

        Args:
            author_id: Author user ID
            options: Paging options

        Returns:
            Comments and pagination metadata
        """
        limit = min(options.limit, self.comment_settings.max_page_size)
        with logfire.span(
            "thread_service.get_user_comments",
            author_id=str(author_id),
            page=options.page,
            limit=limit,
        ):
            comments = await self.comment_repository.find_by_author(
                author_id=author_id,
                limit=limit,
                offset=(options.page - 1) * limit,
            )
            total = await self.comment_repository.count_by_author(author_id)
            return comments, Pagination.build(options.page, limit, total)
