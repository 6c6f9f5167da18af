"""
Chat Module

Single-turn chat completion with retry:
- Truncates messages rejected as too large
- Maps rate limit / size failures to dedicated status codes
"""

from .service import router
from .responder import ChatResponder
from .schemas import ChatRequest, ChatResponse, ChatErrorResponse

__all__ = [
    "router",
    "ChatResponder",
    "ChatRequest",
    "ChatResponse",
    "ChatErrorResponse",
]
