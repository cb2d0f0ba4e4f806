"""Unit tests for QuotaService."""

import asyncio
from typing import Optional

import pytest

from totem.config import QuotaSettings
from totem.domain.model import QuotaCounter
from totem.domain.repository import QuotaRepository
from totem.domain.service import QuotaService
from totem.domain.value import MembershipTier, UserId
from totem.persistence.repository.inmemory import InMemoryQuotaRepository
from tests.conftest import DAY_MS, HOUR_MS, T0
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

ALICE = UserId("alice")


class _YieldingQuotaRepository(InMemoryQuotaRepository):
    """Quota store whose reads suspend, like a network round trip would."""

    async def find_by_user(self, user_id: UserId) -> Optional[QuotaCounter]:
        await asyncio.sleep(0)
        return await super().find_by_user(user_id)


class TestResetIfExpired:
    """Tests for the daily rollover."""

    @pytest.mark.asyncio
    async def test_new_user_gets_free_allowance(self, unit_env):
        """Users without a counter start with the free-tier limit."""
        quota_service = await unit_env.get(QuotaService)

        counter = await quota_service.reset_if_expired(ALICE, T0)

        assert counter.remaining == 5
        assert counter.tier == MembershipTier.FREE
        assert counter.reset_at == T0

    @pytest.mark.asyncio
    async def test_same_day_keeps_remaining(self, unit_env):
        """Within one UTC day the counter is left alone."""
        # Arrange
        quota_service = await unit_env.get(QuotaService)
        quota_repo = await unit_env.get(QuotaRepository)
        await quota_repo.save(QuotaCounter(user_id=ALICE, remaining=2, reset_at=T0))

        # Act
        counter = await quota_service.reset_if_expired(ALICE, T0 + HOUR_MS)

        # Assert
        assert counter.remaining == 2

    @pytest.mark.asyncio
    async def test_next_day_restores_tier_limit(self, unit_env):
        """A new UTC day refills the counter to its tier limit."""
        # Arrange
        quota_service = await unit_env.get(QuotaService)
        quota_repo = await unit_env.get(QuotaRepository)
        await quota_repo.save(
            QuotaCounter(
                user_id=ALICE, remaining=0, reset_at=T0, tier=MembershipTier.PREMIUM
            )
        )

        # Act
        counter = await quota_service.reset_if_expired(ALICE, T0 + DAY_MS)

        # Assert
        assert counter.remaining == 20
        assert counter.reset_at == T0 + DAY_MS
        assert (await quota_repo.find_by_user(ALICE)).remaining == 20


class TestDecrement:
    """Tests for consuming refreshes."""

    @pytest.mark.asyncio
    async def test_decrement_consumes_one(self, unit_env):
        """Each decrement uses one refresh."""
        quota_service = await unit_env.get(QuotaService)

        remaining = await quota_service.decrement(ALICE, T0)

        assert remaining == 4
        assert await quota_service.get_remaining(ALICE, T0) == 4

    @pytest.mark.asyncio
    async def test_decrement_never_goes_negative(self, unit_env):
        """The counter floors at zero."""
        # Arrange
        quota_service = await unit_env.get(QuotaService)
        quota_repo = await unit_env.get(QuotaRepository)
        await quota_repo.save(QuotaCounter(user_id=ALICE, remaining=0, reset_at=T0))

        # Act
        remaining = await quota_service.decrement(ALICE, T0)

        # Assert
        assert remaining == 0

    @pytest.mark.asyncio
    async def test_concurrent_decrements_are_not_lost(self):
        """Racing decrements each take their own unit."""
        # Arrange
        quota_repo = _YieldingQuotaRepository()
        quota_service = QuotaService(quota_repo, QuotaSettings())
        await quota_repo.save(QuotaCounter(user_id=ALICE, remaining=2, reset_at=T0))

        # Act
        await asyncio.gather(
            quota_service.decrement(ALICE, T0 + HOUR_MS),
            quota_service.decrement(ALICE, T0 + HOUR_MS),
        )

        # Assert
        assert (await quota_repo.find_by_user(ALICE)).remaining == 0


class TestSetTier:
    """Tests for membership tier changes."""

    @pytest.mark.asyncio
    async def test_upgrade_refills_to_premium_limit(self, unit_env):
        """Moving to premium grants the premium allowance immediately."""
        quota_service = await unit_env.get(QuotaService)

        counter = await quota_service.set_tier(ALICE, MembershipTier.PREMIUM, T0)

        assert counter.remaining == 20
        assert await quota_service.get_remaining(ALICE, T0) == 20
