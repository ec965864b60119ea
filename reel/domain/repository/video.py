"""Video repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from reel.domain.model.video import Video
from reel.domain.value import VideoId


class VideoRepository(ABC):
    """Repository for the counter-facing part of Video."""

    @abstractmethod
    async def find_by_id(self, video_id: VideoId) -> Optional[Video]:
        """Find a video by ID.

        Args:
            video_id: The video's unique identifier

        Returns:
            The video if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, video: Video) -> Video:
        """Save a video (create or update)."""
        pass

    @abstractmethod
    async def increment_comments_count(self, video_id: VideoId, amount: int) -> None:
        """Atomically add ``amount`` (may be negative) to the comment counter.

        The counter never drops below zero.
        """
        pass

    @abstractmethod
    async def set_comments_count(self, video_id: VideoId, count: int) -> None:
        """Overwrite the comment counter with an exact value."""
        pass
