"""Refresh quota counter."""

from pydantic import Field

from totem.domain.model.common import DomainModel
from totem.domain.value import MembershipTier, UserId


class QuotaCounter(DomainModel):
    """Per-user daily allowance of refreshes.

    Only the refresh flow decrements it; the daily rollover restores it to
    the tier limit.
    """

    user_id: UserId
    remaining: int = Field(ge=0)
    reset_at: int  # Epoch ms of the last rollover
    tier: MembershipTier = MembershipTier.FREE
