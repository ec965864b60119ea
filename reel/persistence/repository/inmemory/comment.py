"""In-memory comment repository for testing."""

from typing import Optional

from reel.domain.model.comment import Comment
from reel.domain.repository.comment import CommentRepository
from reel.domain.value import CommentId, CommentSortField, SortOrder, UserId, VideoId


def _in_subtree(comment: Comment, root_id: CommentId) -> bool:
    return comment.id == root_id or str(root_id) in comment.thread.ancestor_ids


def _sort_key(sort_by: CommentSortField):
    if sort_by == CommentSortField.LIKES_COUNT:
        return lambda c: c.stats.likes_count
    if sort_by == CommentSortField.REPLIES_COUNT:
        return lambda c: c.stats.replies_count
    return lambda c: c.created_at


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}

    def _visible(self) -> list[Comment]:
        return [c for c in self._comments.values() if c.is_visible]

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def save(self, comment: Comment) -> Comment:
        """Save or update a comment, keeping the stored likes and replies count."""
        existing = self._comments.get(comment.id)
        if existing:
            stats = comment.stats.model_copy(
                update={
                    "likes_count": existing.stats.likes_count,
                    "replies_count": existing.stats.replies_count,
                }
            )
            comment = comment.model_copy(
                update={"likes": existing.likes, "stats": stats}
            )
        self._comments[comment.id] = comment
        return comment

    async def find_top_level(
        self,
        video_id: VideoId,
        sort_by: CommentSortField = CommentSortField.CREATED_AT,
        sort_order: SortOrder = SortOrder.ASC,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Comment]:
        """Find approved top-level comments of a video."""
        comments = [
            c
            for c in self._visible()
            if c.video_id == video_id and c.is_top_level
        ]
        # Stable sorts: creation time breaks ties in the primary key
        comments.sort(key=lambda c: c.created_at)
        comments.sort(key=_sort_key(sort_by), reverse=sort_order == SortOrder.DESC)
        return comments[offset : offset + limit]

    async def count_top_level(self, video_id: VideoId) -> int:
        """Count approved top-level comments of a video."""
        return sum(
            1 for c in self._visible() if c.video_id == video_id and c.is_top_level
        )

    async def find_reply_previews(
        self,
        parent_ids: list[CommentId],
        per_parent: int,
        newest_first: bool = False,
    ) -> dict[CommentId, list[Comment]]:
        """Find up to ``per_parent`` approved direct replies for each parent."""
        previews: dict[CommentId, list[Comment]] = {}
        for parent_id in parent_ids:
            replies = [c for c in self._visible() if c.parent_id == parent_id]
            replies.sort(key=lambda c: c.created_at, reverse=newest_first)
            if replies and per_parent > 0:
                previews[parent_id] = replies[:per_parent]
        return previews

    async def find_thread(self, root_id: CommentId, limit: int) -> list[Comment]:
        """Find a comment and all of its approved descendants."""
        comments = [c for c in self._visible() if _in_subtree(c, root_id)]
        comments.sort(key=lambda c: (c.thread.level, c.created_at))
        return comments[:limit]

    async def find_by_author(
        self,
        author_id: UserId,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Comment]:
        """Find approved comments by an author, newest first."""
        comments = [c for c in self._visible() if c.author_id == author_id]
        comments.sort(key=lambda c: c.created_at, reverse=True)
        return comments[offset : offset + limit]

    async def count_by_author(self, author_id: UserId) -> int:
        """Count approved comments by an author."""
        return sum(1 for c in self._visible() if c.author_id == author_id)

    async def delete_subtree(self, comment_id: CommentId) -> list[CommentId]:
        """Delete a comment and all of its descendants."""
        doomed = [c.id for c in self._comments.values() if _in_subtree(c, comment_id)]
        for doomed_id in doomed:
            del self._comments[doomed_id]
        return doomed

    async def add_like(
        self, comment_id: CommentId, user_id: UserId
    ) -> Optional[Comment]:
        """Add a like to the stored comment."""
        comment = self._comments.get(comment_id)
        if comment:
            comment = self._comments[comment_id] = comment.add_like(user_id)
        return comment

    async def remove_like(
        self, comment_id: CommentId, user_id: UserId
    ) -> Optional[Comment]:
        """Remove a like from the stored comment."""
        comment = self._comments.get(comment_id)
        if comment:
            comment = self._comments[comment_id] = comment.remove_like(user_id)
        return comment

    async def count_children(self, parent_id: CommentId) -> int:
        """Count direct replies of a comment, in any moderation status."""
        return sum(1 for c in self._comments.values() if c.parent_id == parent_id)

    async def count_by_video(self, video_id: VideoId) -> int:
        """Count all comments of a video, in any moderation status."""
        return sum(1 for c in self._comments.values() if c.video_id == video_id)

    async def increment_replies_count(
        self, comment_id: CommentId, amount: int = 1
    ) -> None:
        """Add ``amount`` to a comment's replies counter (floor 0)."""
        comment = self._comments.get(comment_id)
        if comment:
            self._comments[comment_id] = comment.with_replies_count(
                comment.stats.replies_count + amount
            )

    async def set_replies_count(self, comment_id: CommentId, count: int) -> None:
        """Overwrite a comment's replies counter."""
        comment = self._comments.get(comment_id)
        if comment:
            self._comments[comment_id] = comment.with_replies_count(count)
