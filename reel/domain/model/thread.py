"""Read models for comment listings and threads.

These are the shapes the thread materializer returns and the cache stores.
They carry no per-viewer state, so a cached copy can be served to anyone.
"""

import math
from typing import Optional

from pydantic import Field

from reel.domain.model.comment import Comment
from reel.domain.model.common import DomainModel
from reel.domain.model.user import User
from reel.domain.value import CommentId, CommentSortField, SortOrder, VideoId
from reel.domain.value.common import ValueObject


class CommentListOptions(ValueObject):
    """Options for listing a video's top-level comments.

    Attributes:
        page: 1-based page number
        limit: Page size, clamped to the configured maximum
        sort_by: Field to order top-level comments by
        sort_order: Ascending or descending
    """

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1)
    sort_by: CommentSortField = CommentSortField.CREATED_AT
    sort_order: SortOrder = SortOrder.ASC


class ThreadOptions(ValueObject):
    """Options for reading a thread.

    Attributes:
        limit: Maximum number of comments returned, root included. Deep
            subtrees may be cut off when the limit is reached.
    """

    limit: int = Field(default=50, ge=1)


class UserCommentListOptions(ValueObject):
    """Options for listing one author's comments (newest first)."""

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1)


class Pagination(DomainModel):
    """Pagination metadata for a page of results."""

    page: int
    limit: int
    total: int
    pages: int
    has_more: bool

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        pages = math.ceil(total / limit) if limit else 0
        return cls(
            page=page,
            limit=limit,
            total=total,
            pages=pages,
            has_more=page < pages,
        )


class CommentNode(DomainModel):
    """A comment with its author and, for list views, its reply previews."""

    comment: Comment
    author: Optional[User] = None
    replies: list["CommentNode"] = []


class CommentPage(DomainModel):
    """A page of top-level comments for one video."""

    video_id: VideoId
    comments: list[CommentNode]
    pagination: Pagination


class CommentThread(DomainModel):
    """A root comment and its descendants in (level, created_at) order."""

    root_id: CommentId
    comments: list[CommentNode]
