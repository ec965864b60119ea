"""Comment use cases."""

from .common import AuthorItem, CommentItem
from .create_comment import CreateCommentRequest, CreateCommentUseCase
from .delete_comment import (
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
)
from .get_comment_thread import (
    GetCommentThreadRequest,
    GetCommentThreadResponse,
    GetCommentThreadUseCase,
)
from .get_user_comments import (
    GetUserCommentsRequest,
    GetUserCommentsResponse,
    GetUserCommentsUseCase,
)
from .get_video_comments import (
    GetVideoCommentsRequest,
    GetVideoCommentsResponse,
    GetVideoCommentsUseCase,
)
from .like_comment import ToggleLikeRequest, ToggleLikeResponse, ToggleLikeUseCase
from .report_comment import (
    ReportCommentRequest,
    ReportCommentResponse,
    ReportCommentUseCase,
)
from .update_comment import UpdateCommentRequest, UpdateCommentUseCase

__all__ = [
    "AuthorItem",
    "CommentItem",
    "CreateCommentRequest",
    "CreateCommentUseCase",
    "DeleteCommentRequest",
    "DeleteCommentResponse",
    "DeleteCommentUseCase",
    "GetCommentThreadRequest",
    "GetCommentThreadResponse",
    "GetCommentThreadUseCase",
    "GetUserCommentsRequest",
    "GetUserCommentsResponse",
    "GetUserCommentsUseCase",
    "GetVideoCommentsRequest",
    "GetVideoCommentsResponse",
    "GetVideoCommentsUseCase",
    "ReportCommentRequest",
    "ReportCommentResponse",
    "ReportCommentUseCase",
    "ToggleLikeRequest",
    "ToggleLikeResponse",
    "ToggleLikeUseCase",
    "UpdateCommentRequest",
    "UpdateCommentUseCase",
]
