"""PostgreSQL implementation of Video repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import func, select

from reel.domain.model import Video
from reel.domain.repository import VideoRepository
from reel.domain.value import VideoId
from reel.persistence.mappers import row_to_video, video_to_dict
from reel.persistence.repository.base import PostgresRepository
from reel.persistence.tables import videos_table


class PostgresVideoRepository(PostgresRepository, VideoRepository):
    """PostgreSQL implementation of VideoRepository."""

    async def find_by_id(self, video_id: VideoId) -> Optional[Video]:
        """Find a video by ID."""
        stmt = select(videos_table).where(videos_table.c.id == video_id)
        result = await self._execute(stmt)
        row = result.fetchone()
        return row_to_video(row._asdict()) if row else None

    async def save(self, video: Video) -> Video:
        """Save a video (create or update)."""
        existing = await self.find_by_id(video.id)
        video_dict = video_to_dict(video)

        if existing:
            stmt = (
                videos_table.update()
                .where(videos_table.c.id == video.id)
                .values(**video_dict)
            )
        else:
            stmt = videos_table.insert().values(**video_dict)

        await self._execute(stmt)
        await self._flush()
        return video

    async def increment_comments_count(self, video_id: VideoId, amount: int) -> None:
        """Atomically add ``amount`` to the comment counter (floor 0)."""
        stmt = (
            videos_table.update()
            .where(videos_table.c.id == video_id)
            .values(
                comments_count=func.greatest(videos_table.c.comments_count + amount, 0),
                updated_at=datetime.now(),
            )
        )
        await self._execute(stmt)
        await self._flush()

    async def set_comments_count(self, video_id: VideoId, count: int) -> None:
        """Overwrite the comment counter with an exact value."""
        stmt = (
            videos_table.update()
            .where(videos_table.c.id == video_id)
            .values(comments_count=max(count, 0), updated_at=datetime.now())
        )
        await self._execute(stmt)
        await self._flush()
