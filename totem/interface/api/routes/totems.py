"""Label (totem) action routes."""

from typing import Optional

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, Query
from fastapi.responses import JSONResponse

from totem.application.usecase.totem import (
    LabelActionResponse,
    LikeLabelRequest,
    LikeLabelUseCase,
    RefreshLabelRequest,
    RefreshLabelUseCase,
    UnlikeLabelRequest,
    UnlikeLabelUseCase,
)
from totem.domain.error import UnauthenticatedError
from totem.domain.service import JWTService
from totem.interface.error import status_for_error

router = APIRouter(
    prefix="/items/{item_id}/labels/{label_name}",
    tags=["totems"],
    route_class=DishkaRoute,
)


def _authenticate(jwt_service: JWTService, auth_token: str | None, action: str) -> str:
    try:
        return jwt_service.current_user_id(auth_token, action=f"{action} a label")
    except UnauthenticatedError as e:
        raise HTTPException(
            status_code=status_for_error(e.code), detail=str(e)
        ) from e


def _respond(response: LabelActionResponse) -> LabelActionResponse | JSONResponse:
    """Serve tagged failures with their mapped status code."""
    if response.success:
        return response
    return JSONResponse(
        status_code=status_for_error(response.error),
        content=response.model_dump(mode="json"),
    )


@router.post("/like", response_model=LabelActionResponse)
async def like_label(
    item_id: str,
    label_name: str,
    like_use_case: FromDishka[LikeLabelUseCase],
    jwt_service: FromDishka[JWTService],
    answer_id: Optional[str] = Query(default=None),
    auth_token: str | None = Cookie(default=None),
):
    """Like a label on a content item.

    Requires authentication. Liking an already liked label succeeds and
    changes nothing.

    Args:
        item_id: Content item ID
        label_name: Exact label name
        like_use_case: Like use case from DI
        jwt_service: JWT service for token verification (injected)
        answer_id: Target a specific answer instead of the first match
        auth_token: JWT token from cookie

    Returns:
        Updated label view, or a tagged failure (404 if item or label is missing)
    """
    user_id = _authenticate(jwt_service, auth_token, "like")
    request = LikeLabelRequest(
        item_id=item_id, label_name=label_name, user_id=user_id, answer_id=answer_id
    )
    return _respond(await like_use_case.execute(request))


@router.delete("/like", response_model=LabelActionResponse)
async def unlike_label(
    item_id: str,
    label_name: str,
    unlike_use_case: FromDishka[UnlikeLabelUseCase],
    jwt_service: FromDishka[JWTService],
    answer_id: Optional[str] = Query(default=None),
    auth_token: str | None = Cookie(default=None),
):
    """Remove the current user's like from a label.

    Requires authentication.

    Returns:
        Updated label view, or a tagged failure (409 ``already_inactive``
        if the user has no active like)
    """
    user_id = _authenticate(jwt_service, auth_token, "unlike")
    request = UnlikeLabelRequest(
        item_id=item_id, label_name=label_name, user_id=user_id, answer_id=answer_id
    )
    return _respond(await unlike_use_case.execute(request))


@router.post("/refresh", response_model=LabelActionResponse)
async def refresh_label(
    item_id: str,
    label_name: str,
    refresh_use_case: FromDishka[RefreshLabelUseCase],
    jwt_service: FromDishka[JWTService],
    answer_id: Optional[str] = Query(default=None),
    auth_token: str | None = Cookie(default=None),
):
    """Spend one daily refresh to restore the user's like to full strength.

    Requires authentication.

    Returns:
        Updated label view with the refreshes left, or a tagged failure
        (429 ``quota_exhausted``, 409 ``not_liked``)
    """
    user_id = _authenticate(jwt_service, auth_token, "refresh")
    request = RefreshLabelRequest(
        item_id=item_id, label_name=label_name, user_id=user_id, answer_id=answer_id
    )
    return _respond(await refresh_use_case.execute(request))
