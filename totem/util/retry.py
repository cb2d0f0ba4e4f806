"""Retry helper for conflicting document transactions."""

import asyncio
from typing import Awaitable, Callable, TypeVar

import logfire

from totem.adapter.error import ConcurrentModificationError
from totem.config import TransactionSettings

T = TypeVar("T")


def backoff_delay_ms(attempt: int, settings: TransactionSettings) -> int:
    """Exponential backoff before retry number ``attempt`` (1-based)."""
    return min(settings.base_delay_ms * (2 ** (attempt - 1)), settings.max_delay_ms)


async def retry_on_conflict(
    operation_name: str,
    operation: Callable[[], Awaitable[T]],
    settings: TransactionSettings,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """Run ``operation``, retrying when its transaction loses a race.

    Only ConcurrentModificationError is retried; every other error
    propagates immediately.

    Args:
        operation_name: Name used in logs
        operation: Zero-argument coroutine factory, called once per attempt
        settings: Attempt cap and backoff bounds
        sleep: Awaitable sleep taking seconds

    Returns:
        The operation's result

    Raises:
        ConcurrentModificationError: After ``max_attempts`` conflicts
    """
    attempt = 1
    while True:
        try:
            return await operation()
        except ConcurrentModificationError as e:
            if attempt >= settings.max_attempts:
                logfire.error(
                    "Transaction retries exhausted",
                    operation=operation_name,
                    attempts=attempt,
                    error=str(e),
                )
                raise ConcurrentModificationError(
                    e.resource, e.identifier, attempts=attempt
                ) from e

            delay = backoff_delay_ms(attempt, settings)
            logfire.warn(
                "Transaction conflict, retrying",
                operation=operation_name,
                attempt=attempt,
                max_attempts=settings.max_attempts,
                delay_ms=delay,
            )
            await sleep(delay / 1000)
            attempt += 1
