"""Get user comments use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from reel.domain.model import CommentNode, Pagination, UserCommentListOptions
from reel.domain.service import JWTService, ThreadService, UserService
from reel.domain.value import UserId

from .common import CommentItem, node_to_item, populate_authors, resolve_viewer


class GetUserCommentsRequest(BaseModel):
    """Get user comments request."""

    user_id: str  # UUID string of the author
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1)
    auth_token: str | None = None


class GetUserCommentsResponse(BaseModel):
    """Get user comments response."""

    user_id: str
    comments: list[CommentItem]
    pagination: Pagination


class GetUserCommentsUseCase:
    """Use case for listing an author's approved comments, newest first."""

    def __init__(
        self,
        thread_service: ThreadService,
        user_service: UserService,
        jwt_service: JWTService,
    ) -> None:
        self.thread_service = thread_service
        self.user_service = user_service
        self.jwt_service = jwt_service

    async def execute(self, request: GetUserCommentsRequest) -> GetUserCommentsResponse:
        author_id = UserId(UUID(request.user_id))
        comments, pagination = await self.thread_service.get_user_comments(
            author_id, UserCommentListOptions(page=request.page, limit=request.limit)
        )
        nodes = await populate_authors(
            [CommentNode(comment=c) for c in comments], self.user_service
        )
        viewer_id = resolve_viewer(self.jwt_service, request.auth_token)
        return GetUserCommentsResponse(
            user_id=str(author_id),
            comments=[node_to_item(node, viewer_id) for node in nodes],
            pagination=pagination,
        )
