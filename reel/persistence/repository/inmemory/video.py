"""In-memory video repository for testing."""

from typing import Optional

from reel.domain.model.video import Video
from reel.domain.repository.video import VideoRepository
from reel.domain.value import VideoId


class InMemoryVideoRepository(VideoRepository):
    """In-memory implementation of VideoRepository for testing."""

    def __init__(self) -> None:
        self._videos: dict[VideoId, Video] = {}

    async def find_by_id(self, video_id: VideoId) -> Optional[Video]:
        """Find a video by ID."""
        return self._videos.get(video_id)

    async def save(self, video: Video) -> Video:
        """Save or update a video."""
        self._videos[video.id] = video
        return video

    async def increment_comments_count(self, video_id: VideoId, amount: int) -> None:
        """Add ``amount`` to the comment counter (floor 0)."""
        video = self._videos.get(video_id)
        if video:
            await self.set_comments_count(
                video_id, video.stats.comments_count + amount
            )

    async def set_comments_count(self, video_id: VideoId, count: int) -> None:
        """Overwrite the comment counter."""
        video = self._videos.get(video_id)
        if video:
            stats = video.stats.model_copy(update={"comments_count": max(count, 0)})
            self._videos[video_id] = video.model_copy(update={"stats": stats})
