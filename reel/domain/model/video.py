"""Video entity.

Videos are uploaded and processed elsewhere. The comment core only reads
them to check existence and maintains their comment counter.
"""

from datetime import datetime

from pydantic import Field

from reel.domain.model.common import DomainModel
from reel.domain.value import UserId, VideoId


class VideoStats(DomainModel):
    """Engagement counters of a video."""

    views_count: int = Field(default=0, ge=0)
    likes_count: int = Field(default=0, ge=0)
    comments_count: int = Field(default=0, ge=0)


class Video(DomainModel):
    """Video entity (counter perspective)."""

    id: VideoId
    creator_id: UserId
    title: str = Field(min_length=1, max_length=200)
    stats: VideoStats = VideoStats()
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
