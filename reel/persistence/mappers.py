"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from reel.domain.model import (
    Comment,
    CommentStats,
    EditRecord,
    Like,
    Moderation,
    User,
    Video,
    VideoStats,
)
from reel.domain.value import (
    CommentId,
    ModerationStatus,
    ReportReason,
    ThreadInfo,
    UserId,
    UserRole,
    VideoId,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        username=row["username"],
        display_name=row.get("display_name"),
        avatar_url=row.get("avatar_url"),
        role=UserRole(row["role"]),
        is_active=row["is_active"],
        created_at=row["created_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict."""
    data = user.model_dump()
    data["role"] = user.role.value
    return data


def row_to_video(row: Dict[str, Any]) -> Video:
    """Convert database row to Video domain model.

    Args:
        row: Database row as dict

    Returns:
        Video domain model
    """
    return Video(
        id=VideoId(_uuid(row["id"])),
        creator_id=UserId(_uuid(row["creator_id"])),
        title=row["title"],
        stats=VideoStats(
            views_count=row["views_count"],
            likes_count=row["likes_count"],
            comments_count=row["comments_count"],
        ),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def video_to_dict(video: Video) -> Dict[str, Any]:
    """Convert Video domain model to database dict (stats flattened)."""
    return {
        "id": video.id,
        "creator_id": video.creator_id,
        "title": video.title,
        "views_count": video.stats.views_count,
        "likes_count": video.stats.likes_count,
        "comments_count": video.stats.comments_count,
        "created_at": video.created_at,
        "updated_at": video.updated_at,
    }


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    JSONB columns come back as plain lists of dicts and strings; they are
    validated into their value types here.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    parent_id = row.get("parent_id")
    return Comment(
        id=CommentId(_uuid(row["id"])),
        video_id=VideoId(_uuid(row["video_id"])),
        author_id=UserId(_uuid(row["author_id"])),
        content=row["content"],
        parent_id=CommentId(_uuid(parent_id)) if parent_id else None,
        mentions=[UserId(_uuid(m)) for m in row.get("mentions") or []],
        thread=ThreadInfo(level=row["thread_level"], path=row["thread_path"]),
        moderation=Moderation(
            status=ModerationStatus(row["moderation_status"]),
            flags=[ReportReason(f) for f in row.get("moderation_flags") or []],
        ),
        stats=CommentStats(
            likes_count=row["likes_count"],
            replies_count=row["replies_count"],
            reports_count=row["reports_count"],
        ),
        likes=[Like.model_validate(like) for like in row.get("likes") or []],
        is_edited=row["is_edited"],
        edit_history=[
            EditRecord.model_validate(record)
            for record in row.get("edit_history") or []
        ],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict.

    Args:
        comment: Comment domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return {
        "id": comment.id,
        "video_id": comment.video_id,
        "author_id": comment.author_id,
        "content": comment.content,
        "parent_id": comment.parent_id,
        "mentions": [str(m) for m in comment.mentions],
        "thread_level": comment.thread.level,
        "thread_path": comment.thread.path,
        "moderation_status": comment.moderation.status.value,
        "moderation_flags": [f.value for f in comment.moderation.flags],
        "likes": [like.model_dump(mode="json") for like in comment.likes],
        "likes_count": comment.stats.likes_count,
        "replies_count": comment.stats.replies_count,
        "reports_count": comment.stats.reports_count,
        "is_edited": comment.is_edited,
        "edit_history": [r.model_dump(mode="json") for r in comment.edit_history],
        "created_at": comment.created_at,
        "updated_at": comment.updated_at,
    }
