"""Create comment use case."""

from uuid import UUID

from pydantic import BaseModel

from reel.domain.error import NotFoundError
from reel.domain.service import (
    CommentCacheService,
    CommentService,
    CounterService,
    UserService,
    VideoService,
)
from reel.domain.value import CommentId, UserId, VideoId

from .common import CommentItem, to_comment_item


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    video_id: str  # UUID string
    content: str
    author_id: str  # User ID from authenticated user
    parent_id: str | None = None  # Parent comment ID for replies
    mentions: list[str] = []  # User ID strings


class CreateCommentUseCase:
    """Use case for commenting on a video or replying to another comment."""

    def __init__(
        self,
        comment_service: CommentService,
        counter_service: CounterService,
        cache_service: CommentCacheService,
        video_service: VideoService,
        user_service: UserService,
    ) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
            counter_service: Derived counter maintenance
            cache_service: Comment read cache
            video_service: Video lookups
            user_service: Author lookups
        """
        self.comment_service = comment_service
        self.counter_service = counter_service
        self.cache_service = cache_service
        self.video_service = video_service
        self.user_service = user_service

    async def execute(self, request: CreateCommentRequest) -> CommentItem:
        """Execute create comment flow.

        Steps:
        1. Verify the video and the author exist
        2. Create the comment (validates content and the parent, if replying)
        3. Bump the video's comment counter and the parent's reply counter
        4. Purge cached views of the video and of every thread above the comment

        Args:
            request: Create comment request

        Returns:
            The new comment with its author

        Raises:
            NotFoundError: If the video, author or parent does not exist
            ValidationError: If the content is empty or too long
            CrossVideoError: If the parent belongs to another video
            DepthLimitError: If the parent is at the maximum level
        """
        video_id = VideoId(UUID(request.video_id))
        author_id = UserId(UUID(request.author_id))

        video = await self.video_service.get_video_by_id(video_id)
        if not video:
            raise NotFoundError("Video", str(video_id))

        author = await self.user_service.get_user_by_id(author_id)
        if not author:
            raise NotFoundError("User", str(author_id))

        comment = await self.comment_service.create_comment(
            video_id=video_id,
            author_id=author_id,
            content=request.content,
            parent_id=CommentId(UUID(request.parent_id)) if request.parent_id else None,
            mentions=[UserId(UUID(m)) for m in request.mentions],
        )

        await self.counter_service.on_comment_created(comment)
        await self.cache_service.invalidate_for_comment(comment)

        return to_comment_item(comment, author, viewer_id=author_id)
