"""Domain model entities for Reel."""

from reel.domain.model.comment import (
    Comment,
    CommentStats,
    EditRecord,
    Like,
    Moderation,
    validate_comment_content,
)
from reel.domain.model.thread import (
    CommentListOptions,
    CommentNode,
    CommentPage,
    CommentThread,
    Pagination,
    ThreadOptions,
    UserCommentListOptions,
)
from reel.domain.model.user import User
from reel.domain.model.video import Video, VideoStats

__all__ = [
    "Comment",
    "CommentListOptions",
    "CommentNode",
    "CommentPage",
    "CommentStats",
    "CommentThread",
    "EditRecord",
    "Like",
    "Moderation",
    "Pagination",
    "ThreadOptions",
    "User",
    "UserCommentListOptions",
    "Video",
    "VideoStats",
    "validate_comment_content",
]
