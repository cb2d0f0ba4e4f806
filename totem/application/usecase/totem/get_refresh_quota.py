"""Get refresh quota use case."""

from typing import Optional

from pydantic import BaseModel

from totem.application.usecase.base import BaseUseCase
from totem.config import QuotaSettings
from totem.domain.service import QuotaService
from totem.domain.value import MembershipTier, UserId


class GetRefreshQuotaRequest(BaseModel):
    """Get refresh quota request."""

    user_id: str
    now: Optional[int] = None


class GetRefreshQuotaResponse(BaseModel):
    """A user's refresh allowance for today."""

    user_id: str
    remaining: int
    daily_limit: int
    tier: MembershipTier
    reset_at: int


class GetRefreshQuotaUseCase(
    BaseUseCase[GetRefreshQuotaRequest, GetRefreshQuotaResponse]
):
    """Use case for reading how many refreshes a user has left."""

    def __init__(
        self, quota_service: QuotaService, quota_settings: QuotaSettings
    ) -> None:
        """Initialize get refresh quota use case.

        Args:
            quota_service: Quota domain service
            quota_settings: Per-tier daily limits
        """
        self.quota_service = quota_service
        self.quota_settings = quota_settings

    async def execute(self, request: GetRefreshQuotaRequest) -> GetRefreshQuotaResponse:
        """Execute get refresh quota flow.

        The daily rollover is applied first, so the first read of a new day
        already shows the full allowance.
        """
        counter = await self.quota_service.reset_if_expired(
            UserId(request.user_id), request.now
        )
        return GetRefreshQuotaResponse(
            user_id=counter.user_id,
            remaining=counter.remaining,
            daily_limit=self.quota_settings.limit_for(counter.tier),
            tier=counter.tier,
            reset_at=counter.reset_at,
        )
