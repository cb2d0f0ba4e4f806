"""Refresh quota domain service."""

from datetime import datetime, timezone
from typing import AsyncContextManager, Optional

import logfire

from totem.config import QuotaSettings
from totem.domain.model.quota import QuotaCounter
from totem.domain.repository import QuotaRepository
from totem.domain.value import MembershipTier, UserId

from .base import Service


def _utc_day(timestamp_ms: int) -> tuple[int, int, int]:
    moment = datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc)
    return moment.year, moment.month, moment.day


class QuotaService(Service):
    """Domain service for the daily refresh allowance."""

    def __init__(
        self, quota_repository: QuotaRepository, quota_settings: QuotaSettings
    ) -> None:
        """Initialize quota service.

        Args:
            quota_repository: Quota counter repository
            quota_settings: Per-tier daily limits
        """
        self.quota_repository = quota_repository
        self.quota_settings = quota_settings

    async def reset_if_expired(
        self, user_id: UserId, now: Optional[int] = None
    ) -> QuotaCounter:
        """Apply the daily rollover.

        A counter last reset on an earlier UTC calendar day is restored to
        its tier limit. Users without a counter are provisioned with a full
        free-tier allowance.

        Args:
            user_id: User ID
            now: Current time in epoch milliseconds

        Returns:
            The current counter
        """
        now = self.resolve_now(now)
        counter = await self.quota_repository.find_by_user(user_id)

        if counter is None:
            counter = QuotaCounter(
                user_id=user_id,
                remaining=self.quota_settings.limit_for(MembershipTier.FREE),
                reset_at=now,
                tier=MembershipTier.FREE,
            )
            logfire.info("Provisioned refresh quota", user_id=user_id)
            return await self.quota_repository.save(counter)

        if _utc_day(counter.reset_at) != _utc_day(now):
            counter = counter.model_copy(
                update={
                    "remaining": self.quota_settings.limit_for(counter.tier),
                    "reset_at": now,
                }
            )
            logfire.info(
                "Daily refresh quota reset",
                user_id=user_id,
                tier=counter.tier.value,
                remaining=counter.remaining,
            )
            return await self.quota_repository.save(counter)

        return counter

    async def get_remaining(self, user_id: UserId, now: Optional[int] = None) -> int:
        """Refreshes the user has left today, after applying the rollover."""
        counter = await self.reset_if_expired(user_id, now)
        return counter.remaining

    async def decrement(self, user_id: UserId, now: Optional[int] = None) -> int:
        """Consume one refresh.

        Never goes below zero.

        Returns:
            Refreshes remaining after the decrement
        """
        with logfire.span("quota_service.decrement", user_id=user_id):
            await self.reset_if_expired(user_id, now)
            updated = await self.quota_repository.decrement(user_id)
            if updated is None:
                logfire.warn("Refresh quota already empty", user_id=user_id)
                return 0
            return updated.remaining

    def lock_user(self, user_id: UserId) -> AsyncContextManager[None]:
        """Exclusive use of a user's allowance for one check-and-charge.

        Usage:
            async with quota_service.lock_user(user_id):
                if await quota_service.get_remaining(user_id) > 0:
                    ...
                    await quota_service.decrement(user_id)
        """
        return self.quota_repository.lock(user_id)

    async def set_tier(
        self, user_id: UserId, tier: MembershipTier, now: Optional[int] = None
    ) -> QuotaCounter:
        """Move a user to a membership tier and refill to its limit.

        Args:
            user_id: User ID
            tier: New membership tier
            now: Current time in epoch milliseconds

        Returns:
            The refilled counter
        """
        now = self.resolve_now(now)
        counter = QuotaCounter(
            user_id=user_id,
            remaining=self.quota_settings.limit_for(tier),
            reset_at=now,
            tier=tier,
        )
        logfire.info("Membership tier changed", user_id=user_id, tier=tier.value)
        return await self.quota_repository.save(counter)
