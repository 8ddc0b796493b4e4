"""
Rate-limit retry policy for generation exchanges.

A rate-limited exchange is retried as a whole after a fixed cooldown, at
most max_retries times (once by default). Every other error propagates
on the first occurrence.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional, TypeVar

from componentgen.environments.base import V0APIError

logger = logging.getLogger("componentgen.generation.retry")

T = TypeVar("T")


class RetryPolicy:
    """
    Fixed-cooldown retry on rate limiting.

    Usage:
        policy = RetryPolicy(cooldown_seconds=60)
        chat = await policy.run(lambda: client.create_chat(prompt))
    """

    def __init__(
        self,
        cooldown_seconds: float = 60.0,
        max_retries: int = 1,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
    ):
        """
        Args:
            cooldown_seconds: Wait before each retry
            max_retries: Retries allowed after the first attempt
            sleep: Awaitable sleep function (asyncio.sleep by default)
        """
        self.cooldown_seconds = cooldown_seconds
        self.max_retries = max_retries
        self._sleep = sleep or asyncio.sleep

    def should_retry(self, error: Exception, retries_done: int) -> bool:
        return (
            isinstance(error, V0APIError)
            and error.is_rate_limit
            and retries_done < self.max_retries
        )

    async def run(
        self,
        operation: Callable[[], Awaitable[T]],
        on_retry: Optional[Callable[[Exception, int], None]] = None,
    ) -> T:
        """
        Run operation, retrying it after a cooldown when rate limited.

        Args:
            operation: Zero-argument coroutine factory, called once per attempt
            on_retry: Called with (error, retry_number) before each cooldown

        Returns:
            The operation's result

        Raises:
            The last error once retries are exhausted, or any non-rate-limit
            error immediately
        """
        retries_done = 0
        while True:
            try:
                return await operation()
            except V0APIError as e:
                if not self.should_retry(e, retries_done):
                    raise
                retries_done += 1
                if on_retry is not None:
                    on_retry(e, retries_done)
                logger.info(f"Rate limited, waiting {self.cooldown_seconds:.0f}s before retry {retries_done}")
                await self._sleep(self.cooldown_seconds)
