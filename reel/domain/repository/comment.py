"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from reel.domain.model.comment import Comment
from reel.domain.value import (
    CommentId,
    CommentSortField,
    SortOrder,
    UserId,
    VideoId,
)


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the infrastructure layer.

    Unless stated otherwise, read queries only return approved comments.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID regardless of moderation status.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update).

        Updates leave the likes and the replies counter untouched; those
        change only through their own atomic operations.

        Args:
            comment: The comment to save

        Returns:
            The comment as stored
        """
        pass

    @abstractmethod
    async def find_top_level(
        self,
        video_id: VideoId,
        sort_by: CommentSortField = CommentSortField.CREATED_AT,
        sort_order: SortOrder = SortOrder.ASC,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Comment]:
        """Find approved top-level comments of a video.

        Args:
            video_id: The video ID
            sort_by: Field to order by
            sort_order: Sort direction
            limit: Maximum number of comments to return
            offset: Number of comments to skip

        Returns:
            One page of top-level comments
        """
        pass

    @abstractmethod
    async def count_top_level(self, video_id: VideoId) -> int:
        """Count approved top-level comments of a video."""
        pass

    @abstractmethod
    async def find_reply_previews(
        self,
        parent_ids: List[CommentId],
        per_parent: int,
        newest_first: bool = False,
    ) -> dict[CommentId, List[Comment]]:
        """Find up to ``per_parent`` approved direct replies for each parent.

        Args:
            parent_ids: Parents to fetch replies for
            per_parent: Maximum replies per parent
            newest_first: Order replies newest first instead of oldest first

        Returns:
            Mapping of parent ID to its replies (parents without replies
            may be absent)
        """
        pass

    @abstractmethod
    async def find_thread(self, root_id: CommentId, limit: int) -> List[Comment]:
        """Find a comment and all of its approved descendants.

        Descendants are matched on their materialized path containing
        ``root_id`` as a segment. Results are ordered by level, then creation
        time, and cut off after ``limit`` rows.

        Args:
            root_id: The thread's root comment ID
            limit: Maximum number of comments to return

        Returns:
            Root (if approved) and descendants in tree-walk order
        """
        pass

    @abstractmethod
    async def find_by_author(
        self,
        author_id: UserId,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Comment]:
        """Find approved comments by an author, newest first."""
        pass

    @abstractmethod
    async def count_by_author(self, author_id: UserId) -> int:
        """Count approved comments by an author."""
        pass

    @abstractmethod
    async def delete_subtree(self, comment_id: CommentId) -> List[CommentId]:
        """Delete a comment and all of its descendants in one operation.

        Args:
            comment_id: Root of the subtree to delete

        Returns:
            IDs of the comments removed
        """
        pass

    @abstractmethod
    async def add_like(
        self, comment_id: CommentId, user_id: UserId
    ) -> Optional[Comment]:
        """Atomically add a user to a comment's likers.

        Liking twice is a no-op. ``likes_count`` is derived from the stored
        likers in the same write.

        Returns:
            The comment as stored afterwards, None if it does not exist
        """
        pass

    @abstractmethod
    async def remove_like(
        self, comment_id: CommentId, user_id: UserId
    ) -> Optional[Comment]:
        """Atomically remove a user from a comment's likers.

        Returns:
            The comment as stored afterwards, None if it does not exist
        """
        pass

    @abstractmethod
    async def count_children(self, parent_id: CommentId) -> int:
        """Count direct replies of a comment, in any moderation status."""
        pass

    @abstractmethod
    async def count_by_video(self, video_id: VideoId) -> int:
        """Count all comments of a video, in any moderation status."""
        pass

    @abstractmethod
    async def increment_replies_count(
        self, comment_id: CommentId, amount: int = 1
    ) -> None:
        """Atomically add ``amount`` to a comment's replies counter."""
        pass

    @abstractmethod
    async def set_replies_count(self, comment_id: CommentId, count: int) -> None:
        """Overwrite a comment's replies counter with an exact value."""
        pass
