"""Per-user routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException

from totem.application.usecase.totem import (
    GetRefreshQuotaRequest,
    GetRefreshQuotaResponse,
    GetRefreshQuotaUseCase,
)
from totem.domain.error import UnauthenticatedError
from totem.domain.service import JWTService
from totem.interface.error import status_for_error

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


@router.get("/me/refreshes", response_model=GetRefreshQuotaResponse)
async def get_my_refreshes(
    quota_use_case: FromDishka[GetRefreshQuotaUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetRefreshQuotaResponse:
    """Refreshes the signed-in user has left today, after any daily reset.

    Raises:
        HTTPException: 401 if not signed in
    """
    try:
        user_id = jwt_service.current_user_id(auth_token, action="read refreshes")
    except UnauthenticatedError as e:
        raise HTTPException(status_code=status_for_error(e.code), detail=str(e)) from e

    return await quota_use_case.execute(GetRefreshQuotaRequest(user_id=user_id))
