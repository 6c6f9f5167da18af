"""
Summarization Configuration

Module-specific settings for document summarization.
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
from chunking.config import CHUNKING_DEFAULT_CHUNK_SIZE, CHUNKING_DEFAULT_OVERLAP

# =========================
# LLM Backend Configuration
# =========================

# Backend type: groq | vllm | ollama (falls back to global config)
SUMMARIZATION_LLM_BACKEND = os.getenv("SUMMARIZATION_LLM_BACKEND", LLM_BACKEND)

SUMMARIZATION_GROQ_URL = os.getenv("SUMMARIZATION_GROQ_URL", GROQ_URL)
SUMMARIZATION_OLLAMA_URL = os.getenv("SUMMARIZATION_OLLAMA_URL", OLLAMA_URL)
SUMMARIZATION_VLLM_URL = os.getenv("SUMMARIZATION_VLLM_URL", VLLM_URL)

SUMMARIZATION_API_KEY = os.getenv("SUMMARIZATION_API_KEY", GROQ_API_KEY)

# =========================
# Model Settings
# =========================

SUMMARIZATION_DEFAULT_MODEL = os.getenv("SUMMARIZATION_DEFAULT_MODEL", DEFAULT_MODEL)
SUMMARIZATION_TEMPERATURE = float(os.getenv("SUMMARIZATION_TEMPERATURE", str(LLM_TEMPERATURE)))
SUMMARIZATION_MAX_TOKENS = int(os.getenv("SUMMARIZATION_MAX_TOKENS", str(LLM_MAX_TOKENS)))

# =========================
# Chunking Settings
# =========================

SUMMARIZATION_CHUNK_SIZE = int(os.getenv("SUMMARIZATION_CHUNK_SIZE", str(CHUNKING_DEFAULT_CHUNK_SIZE)))
SUMMARIZATION_CHUNK_OVERLAP = int(os.getenv("SUMMARIZATION_CHUNK_OVERLAP", str(CHUNKING_DEFAULT_OVERLAP)))

# =========================
# Batch Processing Settings
# =========================

# Chunks summarized concurrently; also the cap on in-flight LLM calls
SUMMARIZATION_BATCH_SIZE = int(os.getenv("SUMMARIZATION_BATCH_SIZE", "3"))

# Retry budget per chunk
SUMMARIZATION_MAX_RETRIES = int(os.getenv("SUMMARIZATION_MAX_RETRIES", "3"))

# =========================
# Rate Limit Cooldowns (seconds)
# =========================

SUMMARIZATION_INITIAL_DELAY = float(os.getenv("SUMMARIZATION_INITIAL_DELAY", "1.0"))
SUMMARIZATION_RETRY_DELAY = float(os.getenv("SUMMARIZATION_RETRY_DELAY", "2.0"))
SUMMARIZATION_BATCH_COOLDOWN = float(os.getenv("SUMMARIZATION_BATCH_COOLDOWN", "2.0"))
SUMMARIZATION_COMBINE_DELAY = float(os.getenv("SUMMARIZATION_COMBINE_DELAY", "1.0"))

# =========================
# Connection Settings
# =========================

SUMMARIZATION_CONNECTION_TIMEOUT = int(os.getenv("SUMMARIZATION_CONNECTION_TIMEOUT", "300"))
SUMMARIZATION_CONNECTION_POOL_LIMIT = int(os.getenv("SUMMARIZATION_CONNECTION_POOL_LIMIT", "50"))
