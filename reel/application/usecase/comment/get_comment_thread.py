"""Get comment thread use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from reel.domain.error import NotFoundError
from reel.domain.model import ThreadOptions
from reel.domain.service import (
    CommentCacheService,
    JWTService,
    ThreadService,
    UserService,
)
from reel.domain.value import CommentId

from .common import CommentItem, node_to_item, populate_authors, resolve_viewer


class GetCommentThreadRequest(BaseModel):
    """Get comment thread request."""

    comment_id: str  # UUID string of the thread root
    limit: int | None = Field(default=None, ge=1)
    auth_token: str | None = None


class GetCommentThreadResponse(BaseModel):
    """Get comment thread response.

    Comments are ordered by level, then creation time.
    """

    root_id: str
    comments: list[CommentItem]
    cached: bool


class GetCommentThreadUseCase:
    """Use case for reading a comment together with its descendants."""

    def __init__(
        self,
        thread_service: ThreadService,
        user_service: UserService,
        cache_service: CommentCacheService,
        jwt_service: JWTService,
    ) -> None:
        self.thread_service = thread_service
        self.user_service = user_service
        self.cache_service = cache_service
        self.jwt_service = jwt_service

    async def execute(
        self, request: GetCommentThreadRequest
    ) -> GetCommentThreadResponse:
        """Execute get thread flow.

        Raises:
            NotFoundError: If the thread is empty (root missing or hidden)
        """
        root_id = CommentId(UUID(request.comment_id))
        limit = self.thread_service.thread_limit(request.limit)

        with logfire.span(
            "get_comment_thread.execute", root_id=str(root_id), limit=limit
        ):
            thread = await self.cache_service.get_thread(root_id, limit)
            cached = thread is not None

            if thread is None:
                thread = await self.thread_service.get_thread(
                    root_id, ThreadOptions(limit=limit)
                )
                if not thread.comments:
                    raise NotFoundError("Comment thread", str(root_id))
                thread = thread.model_copy(
                    update={
                        "comments": await populate_authors(
                            thread.comments, self.user_service
                        )
                    }
                )
                await self.cache_service.set_thread(thread, limit)

            viewer_id = resolve_viewer(self.jwt_service, request.auth_token)
            return GetCommentThreadResponse(
                root_id=str(root_id),
                comments=[node_to_item(node, viewer_id) for node in thread.comments],
                cached=cached,
            )
