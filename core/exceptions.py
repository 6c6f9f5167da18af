"""
Exception types shared by the LLM client, extractor and pipelines.

LLM failures are split by how callers recover from them:
payload-too-large errors are recovered by shrinking the input,
everything else by waiting and retrying.
"""
from typing import Optional


class LLMError(RuntimeError):
    """Base exception for all completion backend failures."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class PayloadTooLargeError(LLMError):
    """
    The backend rejected the request body as too large (HTTP 413).

    Recoverable by re-splitting (summaries) or truncating (chat).
    """

    def __init__(self, message: str = "LLM request payload too large"):
        super().__init__(message, status_code=413)


class RateLimitError(LLMError):
    """The backend rate limited the request (HTTP 429). Transient."""

    def __init__(self, message: str = "LLM rate limit exceeded"):
        super().__init__(message, status_code=429)


class LLMServiceError(LLMError):
    """
    Any other backend failure: 5xx, unexpected 4xx, timeouts, connection errors,
    malformed responses. Treated as transient.
    """

    pass


class ExtractionError(Exception):
    """Text could not be extracted from an uploaded document. Not retried."""

    pass


class EmptyDocumentError(ValueError):
    """The document contains no text to summarize."""

    pass
