"""
Chat Configuration

Module-specific settings for the single-turn chat endpoint.
"""
import os

from config import (
    LLM_BACKEND,
    GROQ_URL,
    GROQ_API_KEY,
    OLLAMA_URL,
    VLLM_URL,
    DEFAULT_MODEL,
    LLM_TEMPERATURE,
    LLM_MAX_TOKENS,
)

# =========================
# LLM Backend Configuration
# =========================

# Backend type: groq | vllm | ollama (falls back to global config)
CHAT_LLM_BACKEND = os.getenv("CHAT_LLM_BACKEND", LLM_BACKEND)

CHAT_GROQ_URL = os.getenv("CHAT_GROQ_URL", GROQ_URL)
CHAT_OLLAMA_URL = os.getenv("CHAT_OLLAMA_URL", OLLAMA_URL)
CHAT_VLLM_URL = os.getenv("CHAT_VLLM_URL", VLLM_URL)

CHAT_API_KEY = os.getenv("CHAT_API_KEY", GROQ_API_KEY)

# =========================
# Model Settings
# =========================

CHAT_DEFAULT_MODEL = os.getenv("CHAT_DEFAULT_MODEL", DEFAULT_MODEL)
CHAT_TEMPERATURE = float(os.getenv("CHAT_TEMPERATURE", str(LLM_TEMPERATURE)))
CHAT_MAX_TOKENS = int(os.getenv("CHAT_MAX_TOKENS", str(LLM_MAX_TOKENS)))

# =========================
# Retry Settings
# =========================

CHAT_MAX_RETRIES = int(os.getenv("CHAT_MAX_RETRIES", "3"))

# Message length used when the backend rejects a message as too large
CHAT_TRUNCATE_CHARS = int(os.getenv("CHAT_TRUNCATE_CHARS", "1500"))

CHAT_INITIAL_DELAY = float(os.getenv("CHAT_INITIAL_DELAY", "1.0"))
CHAT_RETRY_DELAY = float(os.getenv("CHAT_RETRY_DELAY", "2.0"))

# =========================
# Connection Settings
# =========================

CHAT_CONNECTION_TIMEOUT = int(os.getenv("CHAT_CONNECTION_TIMEOUT", "120"))
CHAT_CONNECTION_POOL_LIMIT = int(os.getenv("CHAT_CONNECTION_POOL_LIMIT", "50"))
