"""Domain value objects for the totem engine."""

from totem.domain.value.identifiers import AnswerId, ContentItemId, UserId
from totem.domain.value.types import (
    WEEK_MS,
    YEAR_MS,
    DecayModel,
    Direction,
    MembershipTier,
)

__all__ = [
    # Identifiers
    "AnswerId",
    "ContentItemId",
    "UserId",
    # Types
    "DecayModel",
    "Direction",
    "MembershipTier",
    "WEEK_MS",
    "YEAR_MS",
]
