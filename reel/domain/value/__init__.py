"""Domain value objects for Reel."""

from reel.domain.value.identifiers import CommentId, UserId, VideoId
from reel.domain.value.types import (
    CommentSortField,
    FieldError,
    ModerationStatus,
    ReportReason,
    SortOrder,
    ThreadInfo,
    UserRole,
    ValidationResult,
)

__all__ = [
    # Identifiers
    "UserId",
    "VideoId",
    "CommentId",
    # Types
    "CommentSortField",
    "FieldError",
    "ModerationStatus",
    "ReportReason",
    "SortOrder",
    "ThreadInfo",
    "UserRole",
    "ValidationResult",
]
