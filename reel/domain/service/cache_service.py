"""Comment read-cache service.

Cached views:
- a page of a video's top-level comments, namespace ``comments``,
  key ``video:<video_id>:page:<page>:limit:<limit>:sort:<field>:<order>``
- a thread rooted at a comment, namespace ``comment_threads``,
  key ``<root_id>:limit:<limit>``

Any write under a video purges every cached page of that video and every
cached thread whose key embeds the written comment or one of its ancestors.
Missed purges are bounded by the TTLs in ``CacheSettings``.
"""

from abc import ABC, abstractmethod

import logfire
from pydantic import ValidationError as PydanticValidationError

from reel.config import CacheSettings
from reel.domain.error import CacheError
from reel.domain.model.comment import Comment
from reel.domain.model.thread import CommentListOptions, CommentPage, CommentThread
from reel.domain.value import CommentId, VideoId

from .base import Service

VIDEO_COMMENTS_NAMESPACE = "comments"
THREAD_NAMESPACE = "comment_threads"


class CacheClient(ABC):
    """Namespaced key/value cache with TTLs and pattern deletes.

    Implementations raise ``CacheError`` on any backend failure.
    """

    @abstractmethod
    async def get(self, namespace: str, key: str) -> str | None:
        """Return the cached value, or None on a miss."""
        pass

    @abstractmethod
    async def set(self, namespace: str, key: str, value: str, ttl: int) -> None:
        """Store a value that expires after ``ttl`` seconds."""
        pass

    @abstractmethod
    async def delete(self, namespace: str, key: str) -> int:
        """Delete one key. Returns the number of keys removed."""
        pass

    @abstractmethod
    async def delete_pattern(self, namespace: str, pattern: str) -> int:
        """Delete every key in ``namespace`` matching a glob ``pattern``.

        Returns:
            Number of keys removed
        """
        pass


def video_comments_key(video_id: VideoId, options: CommentListOptions) -> str:
    """Cache key of one page of a video's comment list."""
    return (
        f"video:{video_id}:page:{options.page}:limit:{options.limit}"
        f":sort:{options.sort_by.value}:{options.sort_order.value}"
    )


def thread_key(root_id: CommentId, limit: int) -> str:
    """Cache key of a thread read."""
    return f"{root_id}:limit:{limit}"


class CommentCacheService(Service):
    """Read-through cache for comment views with write invalidation.

    Cache failures never propagate: reads degrade to a miss and
    invalidations are skipped, leaving the TTL to expire stale entries.
    """

    def __init__(self, cache_client: CacheClient, cache_settings: CacheSettings) -> None:
        """Initialize comment cache service.

        Args:
            cache_client: Cache backend
            cache_settings: Cache TTLs
        """
        self.cache_client = cache_client
        self.cache_settings = cache_settings

    async def get_video_comments(
        self, video_id: VideoId, options: CommentListOptions
    ) -> CommentPage | None:
        """Return a cached page of a video's comments, if any."""
        key = video_comments_key(video_id, options)
        raw = await self._get(VIDEO_COMMENTS_NAMESPACE, key)
        if raw is None:
            return None
        try:
            return CommentPage.model_validate_json(raw)
        except PydanticValidationError as e:
            logfire.warn("Discarding unreadable cache entry", key=key, error=str(e))
            return None

    async def set_video_comments(
        self, page: CommentPage, options: CommentListOptions
    ) -> None:
        """Cache a page of a video's comments."""
        await self._set(
            VIDEO_COMMENTS_NAMESPACE,
            video_comments_key(page.video_id, options),
            page.model_dump_json(),
            self.cache_settings.video_comments_ttl,
        )

    async def get_thread(self, root_id: CommentId, limit: int) -> CommentThread | None:
        """Return a cached thread, if any."""
        key = thread_key(root_id, limit)
        raw = await self._get(THREAD_NAMESPACE, key)
        if raw is None:
            return None
        try:
            return CommentThread.model_validate_json(raw)
        except PydanticValidationError as e:
            logfire.warn("Discarding unreadable cache entry", key=key, error=str(e))
            return None

    async def set_thread(self, thread: CommentThread, limit: int) -> None:
        """Cache a thread read."""
        await self._set(
            THREAD_NAMESPACE,
            thread_key(thread.root_id, limit),
            thread.model_dump_json(),
            self.cache_settings.thread_ttl,
        )

    async def invalidate_for_video(self, video_id: VideoId) -> int:
        """Purge every cached comment-list page of a video.

        Returns:
            Number of entries purged (0 if the cache is unavailable)
        """
        return await self._delete_pattern(VIDEO_COMMENTS_NAMESPACE, f"video:{video_id}:*")

    async def invalidate_for_thread(self, comment_id: CommentId | str) -> int:
        """Purge every cached thread whose key embeds ``comment_id``.

        Returns:
            Number of entries purged (0 if the cache is unavailable)
        """
        return await self._delete_pattern(THREAD_NAMESPACE, f"*{comment_id}*")

    async def invalidate_for_comment(self, comment: Comment) -> None:
        """Purge every cached view a write to ``comment`` could affect.

        Covers the video's list pages and every cached thread rooted at the
        comment or at one of its ancestors.
        """
        with logfire.span(
            "comment_cache.invalidate_for_comment",
            comment_id=str(comment.id),
            video_id=str(comment.video_id),
        ):
            purged = await self.invalidate_for_video(comment.video_id)
            for thread_root in [*comment.thread.ancestor_ids, str(comment.id)]:
                purged += await self.invalidate_for_thread(thread_root)
            logfire.info(
                "Comment caches invalidated",
                comment_id=str(comment.id),
                purged=purged,
            )

    async def _get(self, namespace: str, key: str) -> str | None:
        try:
            return await self.cache_client.get(namespace, key)
        except CacheError as e:
            logfire.warn("Cache read failed", namespace=namespace, key=key, error=str(e))
            return None

    async def _set(self, namespace: str, key: str, value: str, ttl: int) -> None:
        try:
            await self.cache_client.set(namespace, key, value, ttl)
        except CacheError as e:
            logfire.warn("Cache write failed", namespace=namespace, key=key, error=str(e))

    async def _delete_pattern(self, namespace: str, pattern: str) -> int:
        try:
            return await self.cache_client.delete_pattern(namespace, pattern)
        except CacheError as e:
            logfire.warn(
                "Cache invalidation failed",
                namespace=namespace,
                pattern=pattern,
                error=str(e),
            )
            return 0
