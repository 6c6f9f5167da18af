"""
Summarization LLM Client

Builds the summarization-specific LLM configuration and client.
Clients are created per request and closed by their owner.
"""
from typing import Optional

from core import BaseLLMClient, LLMConfig
from .config import (
    SUMMARIZATION_LLM_BACKEND,
    SUMMARIZATION_GROQ_URL,
    SUMMARIZATION_OLLAMA_URL,
    SUMMARIZATION_VLLM_URL,
    SUMMARIZATION_API_KEY,
    SUMMARIZATION_DEFAULT_MODEL,
    SUMMARIZATION_TEMPERATURE,
    SUMMARIZATION_MAX_TOKENS,
    SUMMARIZATION_CONNECTION_TIMEOUT,
    SUMMARIZATION_CONNECTION_POOL_LIMIT,
)


def build_llm_config(model: Optional[str] = None) -> LLMConfig:
    """LLMConfig for summarization, from module settings."""
    return LLMConfig(
        backend=SUMMARIZATION_LLM_BACKEND,
        groq_url=SUMMARIZATION_GROQ_URL,
        ollama_url=SUMMARIZATION_OLLAMA_URL,
        vllm_url=SUMMARIZATION_VLLM_URL,
        api_key=SUMMARIZATION_API_KEY or None,
        model=model or SUMMARIZATION_DEFAULT_MODEL,
        temperature=SUMMARIZATION_TEMPERATURE,
        max_tokens=SUMMARIZATION_MAX_TOKENS,
        timeout=SUMMARIZATION_CONNECTION_TIMEOUT,
        pool_limit=SUMMARIZATION_CONNECTION_POOL_LIMIT,
        task_name="summarize"
    )


def create_llm_client(model: Optional[str] = None) -> BaseLLMClient:
    """Create a summarization client. Call close() when done."""
    return BaseLLMClient(build_llm_config(model))
