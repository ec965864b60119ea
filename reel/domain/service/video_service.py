"""Video domain service."""

import logfire

from reel.domain.model.video import Video
from reel.domain.repository import VideoRepository
from reel.domain.value import VideoId

from .base import Service


class VideoService(Service):
    """Domain service for video lookups."""

    def __init__(self, video_repository: VideoRepository) -> None:
        """Initialize video service.

        Args:
            video_repository: Video repository
        """
        self.video_repository = video_repository

    async def get_video_by_id(self, video_id: VideoId) -> Video | None:
        """Get a video by ID.

        Args:
            video_id: Video ID

        Returns:
            Video if found, None otherwise
        """
        with logfire.span("video_service.get_video_by_id", video_id=str(video_id)):
            video = await self.video_repository.find_by_id(video_id)
            if not video:
                logfire.warn("Video not found", video_id=str(video_id))
            return video
