"""
Test doubles for the completion client and backoff policy.
"""
import re
import asyncio
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from core import BackoffPolicy

SECTION_TEXT_PATTERN = re.compile(r"\(part \d+ of \d+\):\n(.*)\n\nKey points only", re.DOTALL)
SECTION_LABEL_PATTERN = re.compile(r"part (\d+) of (\d+)")
COMBINE_TEXT_PATTERN = re.compile(r"coherent summary:\n\n(.*)\n\nProvide a clear", re.DOTALL)


def section_text(prompt: str) -> str:
    """Chunk text embedded in a section prompt."""
    return SECTION_TEXT_PATTERN.search(prompt).group(1)


def section_ordinal(prompt: str) -> int:
    """Zero-based ordinal from a section prompt label."""
    return int(SECTION_LABEL_PATTERN.search(prompt).group(1)) - 1


def combine_text(prompt: str) -> str:
    """Joined section summaries embedded in a combine prompt."""
    return COMBINE_TEXT_PATTERN.search(prompt).group(1)


def echo_responder(prompt: str, task: Optional[str] = None, **kwargs) -> str:
    """Section prompts -> 'summary-of-chunk-{ordinal}', combine prompts -> joined input."""
    if task == "summarize_combine":
        return combine_text(prompt)
    if task == "summarize_section":
        return f"summary-of-chunk-{section_ordinal(prompt)}"
    return f"reply: {prompt}"


@dataclass(frozen=True)
class RecordingBackoff(BackoffPolicy):
    """Zero-delay policy that records each cooldown instead of sleeping."""
    initial_delay: float = 0.0
    retry_delay: float = 0.0
    batch_cooldown: float = 0.0
    combine_delay: float = 0.0
    events: List = field(default_factory=list)

    async def _pause(self, seconds: float, reason: str) -> None:
        self.events.append(reason)


class FakeCompletionClient:
    """
    In-memory completion client.

    responder(prompt, task=..., system_prompt=..., call_index=...) returns the
    reply, raises an LLMError, or returns an awaitable.
    """

    def __init__(self, responder: Optional[Callable] = None, events: Optional[List] = None):
        self.responder = responder or echo_responder
        self.events = events if events is not None else []
        self.calls = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.closed = False

    async def generate_text_with_logging(self, prompt: str, system_prompt: Optional[str] = None,
                                         task: Optional[str] = None, **kwargs) -> str:
        call_index = len(self.calls)
        self.calls.append({"prompt": prompt, "system_prompt": system_prompt, "task": task})
        self.events.append(("call", task, call_index))

        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            result = self.responder(prompt, task=task, system_prompt=system_prompt, call_index=call_index)
            if asyncio.iscoroutine(result):
                result = await result
            return result
        finally:
            self.in_flight -= 1

    async def close(self):
        self.closed = True

    @property
    def prompts(self) -> List[str]:
        return [c["prompt"] for c in self.calls]
