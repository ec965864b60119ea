"""Video routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, status

from reel.application.usecase.video import (
    ReconcileCountersRequest,
    ReconcileCountersResponse,
    ReconcileCountersUseCase,
)
from reel.domain.error import NotAuthorizedError, NotFoundError
from reel.domain.service import JWTService

router = APIRouter(prefix="/videos", tags=["videos"], route_class=DishkaRoute)


@router.post(
    "/{video_id}/comments/reconcile", response_model=ReconcileCountersResponse
)
async def reconcile_comment_counters(
    video_id: str,
    reconcile_use_case: FromDishka[ReconcileCountersUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ReconcileCountersResponse:
    """Recount a video's comments and overwrite its counter. Admin only."""
    user_id = jwt_service.get_user_id_from_token(auth_token)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )

    try:
        request = ReconcileCountersRequest(video_id=video_id, user_id=user_id)
        return await reconcile_use_case.execute(request)
    except NotAuthorizedError as e:
        logfire.warn("Unauthorized reconcile attempt", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required"
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
