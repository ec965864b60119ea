"""Get video comments use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from reel.domain.error import NotFoundError
from reel.domain.model import CommentListOptions, Pagination
from reel.domain.service import (
    CommentCacheService,
    JWTService,
    ThreadService,
    UserService,
    VideoService,
)
from reel.domain.value import CommentSortField, SortOrder, VideoId

from .common import CommentItem, node_to_item, populate_authors, resolve_viewer


class GetVideoCommentsRequest(BaseModel):
    """Get video comments request."""

    video_id: str  # UUID string
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1)
    sort_by: CommentSortField = CommentSortField.CREATED_AT
    sort_order: SortOrder = SortOrder.ASC
    auth_token: str | None = None  # Optional, only used for is_liked


class GetVideoCommentsResponse(BaseModel):
    """Get video comments response."""

    video_id: str
    comments: list[CommentItem]
    pagination: Pagination
    cached: bool


class GetVideoCommentsUseCase:
    """Use case for listing a video's top-level comments with reply previews."""

    def __init__(
        self,
        thread_service: ThreadService,
        video_service: VideoService,
        user_service: UserService,
        cache_service: CommentCacheService,
        jwt_service: JWTService,
    ) -> None:
        """Initialize get video comments use case.

        Args:
            thread_service: Thread materializer
            video_service: Video lookups
            user_service: Author lookups
            cache_service: Comment read cache
            jwt_service: JWT service for the optional viewer token
        """
        self.thread_service = thread_service
        self.video_service = video_service
        self.user_service = user_service
        self.cache_service = cache_service
        self.jwt_service = jwt_service

    async def execute(
        self, request: GetVideoCommentsRequest
    ) -> GetVideoCommentsResponse:
        """Execute get video comments flow.

        Steps:
        1. Serve the page from cache when present
        2. Otherwise check the video exists, load the page with reply
           previews and authors, and cache it
        3. Mark the comments the viewer has liked

        Raises:
            NotFoundError: If the video does not exist
        """
        video_id = VideoId(UUID(request.video_id))
        options = self.thread_service.list_options(
            CommentListOptions(
                page=request.page,
                limit=request.limit,
                sort_by=request.sort_by,
                sort_order=request.sort_order,
            )
        )

        with logfire.span(
            "get_video_comments.execute",
            video_id=str(video_id),
            page=options.page,
            limit=options.limit,
        ):
            page = await self.cache_service.get_video_comments(video_id, options)
            cached = page is not None

            if page is None:
                video = await self.video_service.get_video_by_id(video_id)
                if not video:
                    raise NotFoundError("Video", str(video_id))

                page = await self.thread_service.get_video_comments(video_id, options)
                page = page.model_copy(
                    update={
                        "comments": await populate_authors(
                            page.comments, self.user_service
                        )
                    }
                )
                await self.cache_service.set_video_comments(page, options)

            viewer_id = resolve_viewer(self.jwt_service, request.auth_token)
            logfire.info(
                "Video comments served",
                video_id=str(video_id),
                count=len(page.comments),
                cached=cached,
            )
            return GetVideoCommentsResponse(
                video_id=str(video_id),
                comments=[node_to_item(node, viewer_id) for node in page.comments],
                pagination=page.pagination,
                cached=cached,
            )
