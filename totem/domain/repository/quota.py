"""Refresh quota repository interface."""

from abc import ABC, abstractmethod
from typing import AsyncContextManager, Optional

from totem.domain.model.quota import QuotaCounter
from totem.domain.value import UserId


class QuotaRepository(ABC):
    """Repository for per-user refresh quota counters."""

    @abstractmethod
    async def find_by_user(self, user_id: UserId) -> Optional[QuotaCounter]:
        """Find a user's quota counter.

        Args:
            user_id: The user's ID

        Returns:
            The counter if the user has one, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, counter: QuotaCounter) -> QuotaCounter:
        """Save a quota counter (create or update).

        Args:
            counter: The counter to save

        Returns:
            The saved counter
        """
        pass

    @abstractmethod
    async def decrement(self, user_id: UserId) -> Optional[QuotaCounter]:
        """Take one unit off a counter in a single step.

        The stored value is decremented in place, never overwritten with a
        value computed from an earlier read.

        Returns:
            The updated counter, or None if the user has no counter or it
            is already at zero
        """
        pass

    @abstractmethod
    def lock(self, user_id: UserId) -> AsyncContextManager[None]:
        """Hold exclusive use of a user's counter.

        Quota-gated work for one user (check, pay-for write, charge) runs
        inside this context so that two concurrent requests cannot both
        pass the check against the same remaining unit.
        """
        pass
