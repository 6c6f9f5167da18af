"""
Single-turn chat with retry.
"""
import logging
from typing import Optional

from core import BackoffPolicy, LLMError, PayloadTooLargeError
from .config import CHAT_MAX_RETRIES, CHAT_TRUNCATE_CHARS, CHAT_INITIAL_DELAY, CHAT_RETRY_DELAY
from .prompts import CHAT_SYSTEM_PROMPT

logger = logging.getLogger(__name__)


def default_backoff_policy() -> BackoffPolicy:
    """Backoff policy from module settings."""
    return BackoffPolicy(initial_delay=CHAT_INITIAL_DELAY, retry_delay=CHAT_RETRY_DELAY)


class ChatResponder:
    """
    Answers a chat message with one LLM call, retrying on failure.

    A message rejected as too large is truncated to truncate_chars before
    the retry; other failures retry the same message.
    """

    def __init__(
        self,
        client,
        backoff: Optional[BackoffPolicy] = None,
        max_retries: int = CHAT_MAX_RETRIES,
        truncate_chars: int = CHAT_TRUNCATE_CHARS
    ):
        """
        Args:
            client: Completion client exposing generate_text_with_logging()
            backoff: Cooldown policy (defaults from module config)
            max_retries: Retry budget per message
            truncate_chars: Length a too-large message is cut to
        """
        self.client = client
        self.backoff = backoff or default_backoff_policy()
        self.max_retries = max_retries
        self.truncate_chars = truncate_chars

    async def respond(self, message: str, retries_remaining: Optional[int] = None) -> str:
        """
        Generate a response to message.

        Raises:
            LLMError: The last failure once retries are exhausted
        """
        if retries_remaining is None:
            retries_remaining = self.max_retries

        await self.backoff.before_attempt()

        try:
            return await self.client.generate_text_with_logging(
                prompt=message,
                system_prompt=CHAT_SYSTEM_PROMPT,
                task="chat"
            )
        except LLMError as e:
            failure = e

        if retries_remaining <= 0:
            logger.error(f"[CHAT] retries exhausted | chars={len(message)} | error={failure}")
            raise failure

        if isinstance(failure, PayloadTooLargeError):
            logger.warning(
                f"[CHAT] Message too long, retrying truncated | chars={len(message)} | "
                f"truncate_to={self.truncate_chars}"
            )
            message = message[:self.truncate_chars]
        else:
            logger.warning(f"[CHAT] Error occurred, retrying | retries_remaining={retries_remaining} | error={failure}")

        await self.backoff.before_retry()
        return await self.respond(message, retries_remaining - 1)
