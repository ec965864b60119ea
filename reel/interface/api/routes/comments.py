"""Comment routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, Query, status
from pydantic import BaseModel

from reel.application.usecase.comment import (
    CommentItem,
    CreateCommentRequest,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    GetCommentThreadRequest,
    GetCommentThreadResponse,
    GetCommentThreadUseCase,
    GetUserCommentsRequest,
    GetUserCommentsResponse,
    GetUserCommentsUseCase,
    GetVideoCommentsRequest,
    GetVideoCommentsResponse,
    GetVideoCommentsUseCase,
    ReportCommentRequest,
    ReportCommentResponse,
    ReportCommentUseCase,
    ToggleLikeRequest,
    ToggleLikeResponse,
    ToggleLikeUseCase,
    UpdateCommentRequest,
    UpdateCommentUseCase,
)
from reel.domain.error import (
    CrossVideoError,
    DepthLimitError,
    NotAuthorizedError,
    NotFoundError,
    ValidationError,
)
from reel.domain.service import JWTService
from reel.domain.value import CommentSortField, SortOrder

router = APIRouter(prefix="/comments", tags=["comments"], route_class=DishkaRoute)

# Malformed ids and request fields surface as ValueError (incl. pydantic's)
BAD_REQUEST_ERRORS = (ValidationError, CrossVideoError, DepthLimitError, ValueError)


def _require_user(jwt_service: JWTService, auth_token: str | None, action: str) -> str:
    user_id = jwt_service.get_user_id_from_token(auth_token)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Authentication required to {action}",
        )
    return user_id


@router.get("/video/{video_id}", response_model=GetVideoCommentsResponse)
async def get_video_comments(
    video_id: str,
    get_video_comments_use_case: FromDishka[GetVideoCommentsUseCase],
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1),
    sort_by: CommentSortField = CommentSortField.CREATED_AT,
    sort_order: SortOrder = SortOrder.ASC,
    auth_token: str | None = Cookie(default=None),
) -> GetVideoCommentsResponse:
    """List a video's approved top-level comments with reply previews.

    Page size is capped at 50. When authenticated, each comment carries
    the viewer's like state.
    """
    try:
        request = GetVideoCommentsRequest(
            video_id=video_id,
            page=page,
            limit=limit,
            sort_by=sort_by,
            sort_order=sort_order,
            auth_token=auth_token,
        )
        return await get_video_comments_use_case.execute(request)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/user/{user_id}", response_model=GetUserCommentsResponse)
async def get_user_comments(
    user_id: str,
    get_user_comments_use_case: FromDishka[GetUserCommentsUseCase],
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1),
    auth_token: str | None = Cookie(default=None),
) -> GetUserCommentsResponse:
    """List a user's approved comments, newest first."""
    try:
        request = GetUserCommentsRequest(
            user_id=user_id, page=page, limit=limit, auth_token=auth_token
        )
        return await get_user_comments_use_case.execute(request)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/{comment_id}/thread", response_model=GetCommentThreadResponse)
async def get_comment_thread(
    comment_id: str,
    get_comment_thread_use_case: FromDishka[GetCommentThreadUseCase],
    limit: int | None = Query(default=None, ge=1),
    auth_token: str | None = Cookie(default=None),
) -> GetCommentThreadResponse:
    """Get a comment and its approved descendants, top-down.

    The result is capped at 100 comments; deep threads may be cut short.
    """
    try:
        request = GetCommentThreadRequest(
            comment_id=comment_id, limit=limit, auth_token=auth_token
        )
        return await get_comment_thread_use_case.execute(request)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment."""

    video_id: str
    content: str
    parent_id: str | None = None  # Parent comment ID for replies
    mentions: list[str] = []


@router.post(
    "",
    response_model=CommentItem,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    request: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CommentItem:
    """Comment on a video or reply to another comment.

    Requires authentication. Replies nest at most five levels deep.
    """
    user_id = _require_user(jwt_service, auth_token, "create comments")

    try:
        use_case_request = CreateCommentRequest(
            video_id=request.video_id,
            content=request.content,
            author_id=user_id,
            parent_id=request.parent_id,
            mentions=request.mentions,
        )
        return await create_comment_use_case.execute(use_case_request)
    except NotFoundError as e:
        logfire.warn("Comment creation failed - not found", error=str(e))
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except BAD_REQUEST_ERRORS as e:
        logfire.warn("Comment creation rejected", error=str(e))
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


class UpdateCommentAPIRequest(BaseModel):
    """API request for updating a comment."""

    content: str


@router.put("/{comment_id}", response_model=CommentItem)
async def update_comment(
    comment_id: str,
    request: UpdateCommentAPIRequest,
    update_comment_use_case: FromDishka[UpdateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CommentItem:
    """Edit a comment's content. Only the author can edit."""
    user_id = _require_user(jwt_service, auth_token, "edit comments")

    try:
        use_case_request = UpdateCommentRequest(
            comment_id=comment_id, user_id=user_id, content=request.content
        )
        return await update_comment_use_case.execute(use_case_request)
    except NotAuthorizedError as e:
        logfire.warn("Unauthorized comment update attempt", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to edit this comment",
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except BAD_REQUEST_ERRORS as e:
        logfire.warn("Comment update validation error", error=str(e))
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete("/{comment_id}", response_model=DeleteCommentResponse)
async def delete_comment(
    comment_id: str,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DeleteCommentResponse:
    """Delete a comment and every reply beneath it.

    The author or an admin can delete.
    """
    user_id = _require_user(jwt_service, auth_token, "delete comments")

    try:
        use_case_request = DeleteCommentRequest(comment_id=comment_id, user_id=user_id)
        return await delete_comment_use_case.execute(use_case_request)
    except NotAuthorizedError as e:
        logfire.warn("Unauthorized comment delete attempt", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to delete this comment",
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.post("/{comment_id}/like", response_model=ToggleLikeResponse)
async def toggle_like(
    comment_id: str,
    toggle_like_use_case: FromDishka[ToggleLikeUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ToggleLikeResponse:
    """Like a comment, or remove the like if the user already liked it."""
    user_id = _require_user(jwt_service, auth_token, "like comments")

    try:
        use_case_request = ToggleLikeRequest(comment_id=comment_id, user_id=user_id)
        return await toggle_like_use_case.execute(use_case_request)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


class ReportCommentAPIRequest(BaseModel):
    """API request for reporting a comment."""

    reason: str  # Validated against ReportReason by the use case request


@router.post("/{comment_id}/report", response_model=ReportCommentResponse)
async def report_comment(
    comment_id: str,
    request: ReportCommentAPIRequest,
    report_comment_use_case: FromDishka[ReportCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ReportCommentResponse:
    """Report a comment for moderation.

    Reasons: spam, inappropriate, harassment, hate_speech, other.
    """
    user_id = _require_user(jwt_service, auth_token, "report comments")

    try:
        use_case_request = ReportCommentRequest(
            comment_id=comment_id, user_id=user_id, reason=request.reason
        )
        return await report_comment_use_case.execute(use_case_request)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        logfire.warn("Comment report rejected", error=str(e))
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
