"""
Core Module

Shared infrastructure components for all modules:
- LLM client base class
- Error types
- Backoff policy
"""

from .llm_client_base import BaseLLMClient, LLMConfig
from .backoff import BackoffPolicy
from .exceptions import (
    LLMError,
    PayloadTooLargeError,
    RateLimitError,
    LLMServiceError,
    ExtractionError,
    EmptyDocumentError,
)

__all__ = [
    "BaseLLMClient",
    "LLMConfig",
    "BackoffPolicy",
    "LLMError",
    "PayloadTooLargeError",
    "RateLimitError",
    "LLMServiceError",
    "ExtractionError",
    "EmptyDocumentError",
]
