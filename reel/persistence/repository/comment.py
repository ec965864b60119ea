"""PostgreSQL implementation of Comment repository."""

from datetime import datetime
from typing import Any, Dict, List, Optional, Set

from sqlalchemy import ColumnElement, cast, func, literal, or_, select
from sqlalchemy.dialects.postgresql import JSONB, JSONPATH

from reel.domain.model import Comment
from reel.domain.model.comment import Like
from reel.domain.repository import CommentRepository
from reel.domain.value import (
    CommentId,
    CommentSortField,
    ModerationStatus,
    SortOrder,
    UserId,
    VideoId,
)
from reel.persistence.mappers import comment_to_dict, row_to_comment
from reel.persistence.repository.base import PostgresRepository
from reel.persistence.tables import comments_table

_APPROVED = ModerationStatus.APPROVED.value

# Written only by the atomic like and reply counter statements
_ATOMIC_COLUMNS = {"likes", "likes_count", "replies_count"}

_OTHER_LIKERS = "$[*] ? (@.user_id != $user_id)"

_SORT_COLUMNS = {
    CommentSortField.CREATED_AT: comments_table.c.created_at,
    CommentSortField.LIKES_COUNT: comments_table.c.likes_count,
    CommentSortField.REPLIES_COUNT: comments_table.c.replies_count,
}


def _in_subtree(comment_id: CommentId):
    return comments_table.c.thread_path.regexp_match(f"/{comment_id}(/|$)")


def _liked_by(user_id: UserId):
    return comments_table.c.likes.contains([{"user_id": str(user_id)}])


class PostgresCommentRepository(PostgresRepository, CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self._execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    def _comment_to_db_dict(
        self, comment: Comment, exclude: Optional[Set[str]] = None
    ) -> Dict[str, Any]:
        comment_dict = comment_to_dict(comment)
        if exclude:
            return {k: v for k, v in comment_dict.items() if k not in exclude}
        return comment_dict

    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update).

        Updates skip the likes and the replies counter, which are only
        written by their atomic statements.
        """
        existing = await self.find_by_id(comment.id)

        if existing:
            comment_dict = self._comment_to_db_dict(comment, exclude=_ATOMIC_COLUMNS)
            stmt = (
                comments_table.update()
                .where(comments_table.c.id == comment.id)
                .values(**comment_dict)
            )
        else:
            stmt = comments_table.insert().values(**comment_to_dict(comment))

        await self._execute(stmt)
        await self._flush()
        return await self.find_by_id(comment.id) or comment

    async def find_top_level(
        self,
        video_id: VideoId,
        sort_by: CommentSortField = CommentSortField.CREATED_AT,
        sort_order: SortOrder = SortOrder.ASC,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Comment]:
        """Find approved top-level comments of a video."""
        column = _SORT_COLUMNS[sort_by]
        primary = column.desc() if sort_order == SortOrder.DESC else column.asc()
        stmt = (
            select(comments_table)
            .where(comments_table.c.video_id == video_id)
            .where(comments_table.c.parent_id.is_(None))
            .where(comments_table.c.moderation_status == _APPROVED)
            .order_by(primary, comments_table.c.created_at, comments_table.c.id)
            .limit(limit)
            .offset(offset)
        )
        result = await self._execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def count_top_level(self, video_id: VideoId) -> int:
        """Count approved top-level comments of a video."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(comments_table.c.video_id == video_id)
            .where(comments_table.c.parent_id.is_(None))
            .where(comments_table.c.moderation_status == _APPROVED)
        )
        result = await self._execute(stmt)
        return result.scalar() or 0

    async def find_reply_previews(
        self,
        parent_ids: List[CommentId],
        per_parent: int,
        newest_first: bool = False,
    ) -> dict[CommentId, List[Comment]]:
        """Find up to ``per_parent`` approved direct replies for each parent.

        Uses a window function so every parent is served by one query.
        """
        if not parent_ids or per_parent <= 0:
            return {}

        created = comments_table.c.created_at
        ranked = (
            select(
                comments_table,
                func.row_number()
                .over(
                    partition_by=comments_table.c.parent_id,
                    order_by=created.desc() if newest_first else created.asc(),
                )
                .label("preview_rank"),
            )
            .where(comments_table.c.parent_id.in_(parent_ids))
            .where(comments_table.c.moderation_status == _APPROVED)
            .subquery()
        )
        stmt = (
            select(ranked)
            .where(ranked.c.preview_rank <= per_parent)
            .order_by(ranked.c.parent_id, ranked.c.preview_rank)
        )
        result = await self._execute(stmt)

        previews: dict[CommentId, List[Comment]] = {}
        for row in result.fetchall():
            reply = row_to_comment(row._asdict())
            previews.setdefault(reply.parent_id, []).append(reply)
        return previews

    async def find_thread(self, root_id: CommentId, limit: int) -> List[Comment]:
        """Find a comment and all of its approved descendants."""
        stmt = (
            select(comments_table)
            .where(or_(comments_table.c.id == root_id, _in_subtree(root_id)))
            .where(comments_table.c.moderation_status == _APPROVED)
            .order_by(comments_table.c.thread_level, comments_table.c.created_at)
            .limit(limit)
        )
        result = await self._execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_by_author(
        self,
        author_id: UserId,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Comment]:
        """Find approved comments by an author, newest first."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.author_id == author_id)
            .where(comments_table.c.moderation_status == _APPROVED)
            .order_by(comments_table.c.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self._execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def count_by_author(self, author_id: UserId) -> int:
        """Count approved comments by an author."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(comments_table.c.author_id == author_id)
            .where(comments_table.c.moderation_status == _APPROVED)
        )
        result = await self._execute(stmt)
        return result.scalar() or 0

    async def delete_subtree(self, comment_id: CommentId) -> List[CommentId]:
        """Delete a comment and all of its descendants in one statement."""
        stmt = (
            comments_table.delete()
            .where(or_(comments_table.c.id == comment_id, _in_subtree(comment_id)))
            .returning(comments_table.c.id)
        )
        result = await self._execute(stmt)
        deleted = [CommentId(row.id) for row in result.fetchall()]
        await self._flush()
        return deleted

    async def _update_likes(
        self, comment_id: CommentId, likes: ColumnElement, guard: ColumnElement
    ) -> Optional[Comment]:
        stmt = (
            comments_table.update()
            .where(comments_table.c.id == comment_id)
            .where(guard)
            .values(likes=likes, likes_count=func.jsonb_array_length(likes))
            .returning(*comments_table.c)
        )
        result = await self._execute(stmt)
        row = result.fetchone()
        await self._flush()
        if row:
            return row_to_comment(row._asdict())
        return await self.find_by_id(comment_id)

    async def add_like(
        self, comment_id: CommentId, user_id: UserId
    ) -> Optional[Comment]:
        """Append a like in one UPDATE unless the user is already a liker."""
        like = Like(user_id=user_id).model_dump(mode="json")
        likes = comments_table.c.likes.op("||", return_type=JSONB)(
            literal([like], JSONB)
        )
        return await self._update_likes(comment_id, likes, ~_liked_by(user_id))

    async def remove_like(
        self, comment_id: CommentId, user_id: UserId
    ) -> Optional[Comment]:
        """Filter a liker out in one UPDATE if the user is a liker."""
        likes = func.jsonb_path_query_array(
            comments_table.c.likes,
            cast(literal(_OTHER_LIKERS), JSONPATH),
            literal({"user_id": str(user_id)}, JSONB),
            type_=JSONB,
        )
        return await self._update_likes(comment_id, likes, _liked_by(user_id))

    async def count_children(self, parent_id: CommentId) -> int:
        """Count direct replies of a comment, in any moderation status."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(comments_table.c.parent_id == parent_id)
        )
        result = await self._execute(stmt)
        return result.scalar() or 0

    async def count_by_video(self, video_id: VideoId) -> int:
        """Count all comments of a video, in any moderation status."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(comments_table.c.video_id == video_id)
        )
        result = await self._execute(stmt)
        return result.scalar() or 0

    async def increment_replies_count(
        self, comment_id: CommentId, amount: int = 1
    ) -> None:
        """Atomically add ``amount`` to the replies counter (floor 0)."""
        stmt = (
            comments_table.update()
            .where(comments_table.c.id == comment_id)
            .values(
                replies_count=func.greatest(comments_table.c.replies_count + amount, 0),
                updated_at=datetime.now(),
            )
        )
        await self._execute(stmt)
        await self._flush()

    async def set_replies_count(self, comment_id: CommentId, count: int) -> None:
        """Overwrite the replies counter with an exact value."""
        stmt = (
            comments_table.update()
            .where(comments_table.c.id == comment_id)
            .values(replies_count=max(count, 0))
        )
        await self._execute(stmt)
        await self._flush()
