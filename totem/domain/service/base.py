"""Base service class for domain services."""

from typing import Optional

from totem.util.clock import now_ms


class Service:
    """Base class for all domain services.

    Domain services contain business logic that doesn't naturally belong
    to a single entity or spans multiple entities/aggregates. Operations
    take an optional ``now`` (epoch ms) so callers and tests control time.
    """

    @staticmethod
    def resolve_now(now: Optional[int]) -> int:
        """The given time, or the wall clock when omitted."""
        return now_ms() if now is None else now
