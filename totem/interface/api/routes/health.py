"""Health and engine info routes."""

import math

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from totem.config import Settings
from totem.domain.value import MembershipTier
from totem.util.clock import now_ms

router = APIRouter(tags=["health"], route_class=DishkaRoute)


class HealthResponse(BaseModel):
    """Liveness plus the engine parameters clients render against."""

    status: str
    now: int
    git_sha: str
    decay_model: str
    decay_window_ms: int | None
    daily_refreshes: dict[str, int]


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: FromDishka[Settings]) -> HealthResponse:
    """Report that the service is up.

    ``now`` is the server clock in epoch ms, so clients can compute label
    freshness consistently. ``decay_window_ms`` is null when labels never
    decay.
    """
    window = settings.decay.window_ms
    return HealthResponse(
        status="healthy",
        now=now_ms(),
        git_sha=settings.git_sha,
        decay_model=settings.decay.model.value,
        decay_window_ms=None if math.isinf(window) else int(window),
        daily_refreshes={
            tier.value: settings.quota.limit_for(tier) for tier in MembershipTier
        },
    )
