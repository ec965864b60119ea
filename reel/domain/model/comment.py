"""Comment entity.

Comments are threaded discussions attached to a video. Nesting is capped at
level 5 and stored as a materialized path of ancestor ids so that a whole
subtree can be matched without walking the tree.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from reel.domain.model.common import DomainModel
from reel.domain.value import (
    CommentId,
    FieldError,
    ModerationStatus,
    ReportReason,
    ThreadInfo,
    UserId,
    ValidationResult,
    VideoId,
)

MAX_CONTENT_LENGTH = 500
AUTO_MODERATION_THRESHOLD = 5


def validate_comment_content(
    content: str | None, max_length: int = MAX_CONTENT_LENGTH
) -> ValidationResult:
    """Check comment text before it is stored.

    Content is trimmed first; the trimmed text must be 1 to ``max_length``
    characters long.

    Args:
        content: Raw text submitted by the user
        max_length: Maximum allowed length after trimming

    Returns:
        Validation result listing every failed check
    """
    errors: list[FieldError] = []
    text = (content or "").strip()
    if not text:
        errors.append(FieldError(field="content", message="Comment content is required"))
    elif len(text) > max_length:
        errors.append(
            FieldError(
                field="content",
                message=f"Comment cannot exceed {max_length} characters",
            )
        )
    return ValidationResult(errors=errors)


class Like(DomainModel):
    """A single user's like on a comment."""

    user_id: UserId
    created_at: datetime = Field(default_factory=datetime.now)


class EditRecord(DomainModel):
    """One version of a comment's content."""

    content: str
    edited_at: datetime = Field(default_factory=datetime.now)


class Moderation(DomainModel):
    """Moderation state of a comment."""

    status: ModerationStatus = ModerationStatus.APPROVED
    flags: list[ReportReason] = []


class CommentStats(DomainModel):
    """Derived counters.

    ``likes_count`` mirrors ``Comment.likes``, ``reports_count`` mirrors
    ``Moderation.flags`` and ``replies_count`` mirrors the number of stored
    comments whose parent is this one.
    """

    likes_count: int = Field(default=0, ge=0)
    replies_count: int = Field(default=0, ge=0)
    reports_count: int = Field(default=0, ge=0)


class Comment(DomainModel):
    """Comment entity.

    Represents a top-level comment on a video or a reply to another comment.

    Threading is managed through:
    - parent_id: Direct parent comment (None for top-level)
    - thread.level: Nesting level (0 for top-level, parent level + 1 for replies)
    - thread.path: "/<root>/.../<parent>", empty for top-level comments

    Mutators return a new instance; persisting it is up to the caller.
    """

    id: CommentId
    video_id: VideoId
    author_id: UserId
    content: str = Field(min_length=1)
    parent_id: Optional[CommentId] = None
    mentions: list[UserId] = []
    thread: ThreadInfo = ThreadInfo()
    moderation: Moderation = Moderation()
    stats: CommentStats = CommentStats()
    likes: list[Like] = []
    is_edited: bool = False
    edit_history: list[EditRecord] = []
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def is_top_level(self) -> bool:
        return self.parent_id is None

    @property
    def is_visible(self) -> bool:
        return self.moderation.status == ModerationStatus.APPROVED

    def is_liked_by(self, user_id: UserId) -> bool:
        """Check whether ``user_id`` has liked this comment."""
        return any(like.user_id == user_id for like in self.likes)

    def add_like(self, user_id: UserId) -> "Comment":
        """Record a like. Liking twice leaves the comment unchanged."""
        if self.is_liked_by(user_id):
            return self
        likes = [*self.likes, Like(user_id=user_id)]
        return self._with_likes(likes)

    def remove_like(self, user_id: UserId) -> "Comment":
        """Drop a like. Users who never liked the comment are ignored."""
        if not self.is_liked_by(user_id):
            return self
        likes = [like for like in self.likes if like.user_id != user_id]
        return self._with_likes(likes)

    def edit(self, new_content: str) -> "Comment":
        """Replace the content and append to the edit history.

        The first edit also preserves the original text, stamped with the
        comment's creation time.
        """
        now = datetime.now()
        history = list(self.edit_history)
        if not self.is_edited:
            history.append(EditRecord(content=self.content, edited_at=self.created_at))
        history.append(EditRecord(content=new_content, edited_at=now))
        return self.model_copy(
            update={
                "content": new_content,
                "is_edited": True,
                "edit_history": history,
                "updated_at": now,
            }
        )

    def add_flag(
        self, reason: ReportReason, threshold: int = AUTO_MODERATION_THRESHOLD
    ) -> "Comment":
        """Record a report reason.

        Each reason is counted once. Reaching ``threshold`` distinct reasons
        moves the comment to pending review.
        """
        if reason in self.moderation.flags:
            return self
        flags = [*self.moderation.flags, reason]
        status = self.moderation.status
        if len(flags) >= threshold:
            status = ModerationStatus.PENDING
        return self.model_copy(
            update={
                "moderation": Moderation(status=status, flags=flags),
                "stats": self.stats.model_copy(update={"reports_count": len(flags)}),
                "updated_at": datetime.now(),
            }
        )

    def with_replies_count(self, replies_count: int) -> "Comment":
        return self.model_copy(
            update={
                "stats": self.stats.model_copy(
                    update={"replies_count": max(replies_count, 0)}
                )
            }
        )

    def _with_likes(self, likes: list[Like]) -> "Comment":
        return self.model_copy(
            update={
                "likes": likes,
                "stats": self.stats.model_copy(update={"likes_count": len(likes)}),
            }
        )
