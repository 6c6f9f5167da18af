"""
Global Configuration

Settings shared by the upload (summarization) and chat services: default
completion backend, model context sizes, token estimation and API options.
Module-specific settings live in each module's config.py and fall back to
the values here.

Every setting can be overridden via environment variables or a .env file
(see .env.example).
"""
import os
from dotenv import load_dotenv

# Load .env file before any os.getenv() calls
load_dotenv()
from functools import lru_cache

# Try to import tiktoken for accurate token estimation
# For airgapped systems, set TIKTOKEN_CACHE_DIR to a directory containing pre-cached encoding files.
try:
    import tiktoken
    _encoder = tiktoken.get_encoding("cl100k_base")
    TIKTOKEN_AVAILABLE = True
except Exception:
    TIKTOKEN_AVAILABLE = False
    _encoder = None

# =========================
# LLM Backend Configuration
# =========================

LLM_BACKEND = os.getenv("LLM_BACKEND", "groq")  # groq | vllm | ollama
GROQ_URL = os.getenv("GROQ_URL", "https://api.groq.com/openai")
GROQ_API_KEY = os.getenv("GROQ_API_KEY", "")
OLLAMA_URL = os.getenv("OLLAMA_URL", "http://localhost:11434")
VLLM_URL = os.getenv("VLLM_URL", "http://localhost:8000")
DEFAULT_MODEL = os.getenv("DEFAULT_MODEL", "llama-3.3-70b-versatile")
LLM_TEMPERATURE = float(os.getenv("LLM_TEMPERATURE", "0.7"))
LLM_MAX_TOKENS = int(os.getenv("LLM_MAX_TOKENS", "2048"))

# =========================
# Model Context Lengths
# =========================

MODEL_CONTEXT_LENGTHS = {
    "llama-3.3-70b-versatile": 131072,
    "llama-3.1-8b-instant": 131072,
    "gemma3:4b": 8192,
}

DEFAULT_CONTEXT_LENGTH = 8192  # Fallback for unknown models

# Context usage warning thresholds (percentage)
CONTEXT_WARNING_THRESHOLD = 80
CONTEXT_ERROR_THRESHOLD = 95


# =========================
# Utility Functions
# =========================

@lru_cache(maxsize=32)
def get_model_context_length(model: str) -> int:
    """Get context length for a model (cached)."""
    return MODEL_CONTEXT_LENGTHS.get(model, DEFAULT_CONTEXT_LENGTH)


def estimate_tokens(text: str) -> int:
    """
    Estimate token count using tiktoken if available, otherwise fallback to char-based estimation.

    Fallback uses ~4 chars per token approximation.
    """
    if TIKTOKEN_AVAILABLE and _encoder is not None:
        return len(_encoder.encode(text))
    return len(text) // 4


# =========================
# API Settings
# =========================

# Comma separated origins allowed to call the API from a browser
CORS_ALLOW_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ALLOW_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]

LOG_TO_FILE = os.getenv("LOG_TO_FILE", "true").lower() == "true"
