"""Domain value objects for the totem engine.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

from enum import Enum

WEEK_MS = 7 * 24 * 60 * 60 * 1000
YEAR_MS = 365 * 24 * 60 * 60 * 1000


class Direction(str, Enum):
    """Direction of an endorsement toggle."""

    LIKE = "like"
    UNLIKE = "unlike"


class DecayModel(str, Enum):
    """How fast a label's crispness fades."""

    FAST = "FAST"
    MEDIUM = "MEDIUM"
    NONE = "NONE"

    @property
    def window_ms(self) -> float:
        """Length of the decay window in milliseconds."""
        if self is DecayModel.FAST:
            return float(WEEK_MS)
        if self is DecayModel.MEDIUM:
            return float(YEAR_MS)
        return float("inf")


class MembershipTier(str, Enum):
    """Membership tier, which sets the daily refresh allowance."""

    FREE = "free"
    PREMIUM = "premium"
