"""
Chat LLM Client

Builds the chat-specific LLM configuration and client.
"""
from typing import Optional

from core import BaseLLMClient, LLMConfig
from .config import (
    CHAT_LLM_BACKEND,
    CHAT_GROQ_URL,
    CHAT_OLLAMA_URL,
    CHAT_VLLM_URL,
    CHAT_API_KEY,
    CHAT_DEFAULT_MODEL,
    CHAT_TEMPERATURE,
    CHAT_MAX_TOKENS,
    CHAT_CONNECTION_TIMEOUT,
    CHAT_CONNECTION_POOL_LIMIT,
)


def build_llm_config(model: Optional[str] = None) -> LLMConfig:
    """LLMConfig for chat, from module settings."""
    return LLMConfig(
        backend=CHAT_LLM_BACKEND,
        groq_url=CHAT_GROQ_URL,
        ollama_url=CHAT_OLLAMA_URL,
        vllm_url=CHAT_VLLM_URL,
        api_key=CHAT_API_KEY or None,
        model=model or CHAT_DEFAULT_MODEL,
        temperature=CHAT_TEMPERATURE,
        max_tokens=CHAT_MAX_TOKENS,
        timeout=CHAT_CONNECTION_TIMEOUT,
        pool_limit=CHAT_CONNECTION_POOL_LIMIT,
        task_name="chat"
    )


def create_llm_client(model: Optional[str] = None) -> BaseLLMClient:
    """Create a chat client. Call close() when done."""
    return BaseLLMClient(build_llm_config(model))
