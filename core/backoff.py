"""
Backoff Policy

Cooldown waits used to stay under the completion backend's rate limits.
Injected into the summarization pipeline and the chat responder so tests
can substitute zero-delay or recording policies.
"""
import asyncio
from dataclasses import dataclass

from logs.logging_config import get_llm_logger

logger = get_llm_logger()


@dataclass(frozen=True)
class BackoffPolicy:
    """
    Fixed cooldown intervals, in seconds.

    initial_delay:  before every completion call on a chunk or chat message
    retry_delay:    before retrying after a transient failure
    batch_cooldown: between consecutive batches of chunks
    combine_delay:  before the final synthesis call
    """
    initial_delay: float = 1.0
    retry_delay: float = 2.0
    batch_cooldown: float = 2.0
    combine_delay: float = 1.0

    @classmethod
    def none(cls) -> "BackoffPolicy":
        """Policy with every delay set to zero."""
        return cls(initial_delay=0.0, retry_delay=0.0, batch_cooldown=0.0, combine_delay=0.0)

    async def before_attempt(self) -> None:
        await self._pause(self.initial_delay, "attempt")

    async def before_retry(self) -> None:
        await self._pause(self.retry_delay, "retry")

    async def between_batches(self) -> None:
        await self._pause(self.batch_cooldown, "batch")

    async def before_combine(self) -> None:
        await self._pause(self.combine_delay, "combine")

    async def _pause(self, seconds: float, reason: str) -> None:
        if seconds <= 0:
            return
        logger.debug(f"[BACKOFF] {reason} | sleeping {seconds:.2f}s")
        await asyncio.sleep(seconds)
