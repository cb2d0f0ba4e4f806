"""In-memory quota repository for testing."""

import asyncio
from collections import defaultdict
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from totem.domain.model import QuotaCounter
from totem.domain.repository import QuotaRepository
from totem.domain.value import UserId


class InMemoryQuotaRepository(QuotaRepository):
    """In-memory implementation of QuotaRepository for testing."""

    def __init__(self) -> None:
        self._counters: dict[UserId, QuotaCounter] = {}
        self._locks: defaultdict[UserId, asyncio.Lock] = defaultdict(asyncio.Lock)
        self.fail_saves = False

    async def find_by_user(self, user_id: UserId) -> Optional[QuotaCounter]:
        """Find a user's quota counter."""
        return self._counters.get(user_id)

    async def save(self, counter: QuotaCounter) -> QuotaCounter:
        """Save a quota counter.

        Raises:
            RuntimeError: If ``fail_saves`` is set
        """
        if self.fail_saves:
            raise RuntimeError("Quota store unavailable")
        self._counters[counter.user_id] = counter
        return counter

    async def decrement(self, user_id: UserId) -> Optional[QuotaCounter]:
        """Decrement without yielding between the read and the write.

        Raises:
            RuntimeError: If ``fail_saves`` is set
        """
        if self.fail_saves:
            raise RuntimeError("Quota store unavailable")
        counter = self._counters.get(user_id)
        if counter is None or counter.remaining <= 0:
            return None
        updated = counter.model_copy(update={"remaining": counter.remaining - 1})
        self._counters[user_id] = updated
        return updated

    @asynccontextmanager
    async def lock(self, user_id: UserId) -> AsyncIterator[None]:
        """Per-user lock shared by everyone using this repository."""
        async with self._locks[user_id]:
            yield
