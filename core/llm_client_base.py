"""
Base LLM Client

Provides shared LLM client functionality for all modules.
Each module creates its own instance with its own configuration.

Features:
- Supports Groq (OpenAI-compatible), VLLM and Ollama backends
- Module-specific configuration (backend, URL, model, credential, etc.)
- Connection pooling per instance
- Comprehensive logging
- Failures classified into PayloadTooLargeError / RateLimitError / LLMServiceError

Usage:
    # In module's llm_client.py
    from core.llm_client_base import BaseLLMClient, LLMConfig

    config = LLMConfig(
        backend="groq",
        api_key=os.getenv("GROQ_API_KEY"),
        model="llama-3.3-70b-versatile",
        task_name="summarize"
    )

    client = BaseLLMClient(config)
    response = await client.generate_text_with_logging(prompt)
"""

import time
import asyncio
import aiohttp
from dataclasses import dataclass
from typing import Optional, Dict, Any

from config import get_model_context_length
from logs.logging_config import (
    get_llm_logger,
    log_llm_request,
    log_llm_response,
    log_metrics,
    log_context_usage,
)
from .exceptions import (
    LLMError,
    LLMServiceError,
    PayloadTooLargeError,
    RateLimitError,
)

logger = get_llm_logger()

CHAT_COMPLETION_BACKENDS = ("groq", "vllm")


@dataclass
class LLMConfig:
    """
    Configuration for an LLM client instance.

    Each module creates its own LLMConfig with module-specific settings.
    This allows different modules to use different backends, models, URLs, etc.

    Example:
        # Chat module - hosted Groq model
        chat_config = LLMConfig(
            backend="groq",
            api_key="gsk_...",
            model="llama-3.3-70b-versatile",
            task_name="chat"
        )

        # Summarization module - local VLLM
        summarization_config = LLMConfig(
            backend="vllm",
            vllm_url="http://gpu-box:8000",
            model="llama3:70b",
            task_name="summarize"
        )
    """
    # Backend selection: "groq", "vllm" or "ollama"
    backend: str = "groq"

    # Backend URLs
    groq_url: str = "https://api.groq.com/openai"
    ollama_url: str = "http://localhost:11434"
    vllm_url: str = "http://localhost:8000"

    # Credential sent as a bearer token (groq, optionally vllm)
    api_key: Optional[str] = None

    # Model settings
    model: str = "llama-3.3-70b-versatile"
    temperature: float = 0.7
    max_tokens: int = 2048

    # Connection settings
    timeout: int = 300
    pool_limit: int = 50

    # Logging identifier
    task_name: str = "unknown"

    def get_backend_url(self) -> str:
        """Get the URL for the configured backend."""
        if self.backend == "groq":
            return self.groq_url
        if self.backend == "vllm":
            return self.vllm_url
        return self.ollama_url

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary. The credential is never included."""
        return {
            "backend": self.backend,
            "url": self.get_backend_url(),
            "model": self.model,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "timeout": self.timeout,
            "pool_limit": self.pool_limit,
            "task_name": self.task_name,
            "api_key_set": bool(self.api_key),
        }


class BaseLLMClient:
    """
    Base LLM client with shared logic for all backends.

    Each module creates its OWN INSTANCE with its OWN CONFIGURATION.

    Error contract:
    - HTTP 413 -> PayloadTooLargeError
    - HTTP 429 -> RateLimitError
    - anything else (other statuses, timeouts, connection errors,
      unexpected response bodies) -> LLMServiceError

    Example:
        config = LLMConfig(backend="groq", api_key=key)
        client = BaseLLMClient(config)

        response = await client.generate_text_with_logging(
            prompt="Summarize this text",
            system_prompt="You are a helpful assistant."
        )
    """

    def __init__(self, config: LLMConfig):
        """
        Initialize LLM client with module-specific configuration.

        Args:
            config: LLMConfig with backend, URL, model, and other settings
        """
        self.config = config
        self._session: Optional[aiohttp.ClientSession] = None

        logger.debug(
            f"[{config.task_name.upper()}_LLM] Initialized | "
            f"backend={config.backend} | model={config.model} | "
            f"url={config.get_backend_url()}"
        )

    @property
    def _tag(self) -> str:
        return f"[{self.config.task_name.upper()}_LLM]"

    async def get_session(self) -> aiohttp.ClientSession:
        """
        Get or create aiohttp session for this instance.

        Each BaseLLMClient instance maintains its own session,
        allowing different modules to have independent connection pools.
        """
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self.config.timeout)
            connector = aiohttp.TCPConnector(
                limit=self.config.pool_limit,
                limit_per_host=self.config.pool_limit
            )
            self._session = aiohttp.ClientSession(
                timeout=timeout,
                connector=connector
            )
            logger.debug(f"{self._tag} Session created | backend={self.config.backend}")
        return self._session

    async def close(self):
        """Close this instance's session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None
            logger.debug(f"{self._tag} Session closed")

    async def generate_text_with_logging(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        model: str = None,
        temperature: float = None,
        max_tokens: int = None,
        task: str = None,
    ) -> str:
        """
        Generate text using the configured backend with full logging.

        Args:
            prompt: The user prompt to send to the LLM
            system_prompt: Optional system instruction
            model: Override model (uses config.model if not specified)
            temperature: Override temperature (uses config.temperature if not specified)
            max_tokens: Override max_tokens (uses config.max_tokens if not specified)
            task: Override task name for logging (uses config.task_name if not specified)

        Returns:
            Generated text response

        Raises:
            LLMError: One of its subclasses, see class docstring
        """
        model_name = model or self.config.model
        temp = temperature if temperature is not None else self.config.temperature
        max_tok = max_tokens if max_tokens is not None else self.config.max_tokens
        task_name = task or self.config.task_name

        full_prompt = f"{system_prompt}\n\n{prompt}" if system_prompt else prompt

        context_limit = get_model_context_length(model_name)

        request_id = log_llm_request(
            model=model_name,
            backend=self.config.backend,
            task=task_name,
            prompt=full_prompt,
            temperature=temp,
            max_tokens=max_tok
        )

        context_stats = log_context_usage(
            request_id=request_id,
            model=model_name,
            prompt=full_prompt,
            context_limit=context_limit
        )

        start_time = time.time()

        try:
            if self.config.backend in CHAT_COMPLETION_BACKENDS:
                response = await self._call_chat_completions(
                    prompt, system_prompt, model_name, temp, max_tok
                )
            else:
                response = await self._call_ollama(prompt, system_prompt, model_name, temp)

            latency_ms = (time.time() - start_time) * 1000

            log_llm_response(
                request_id=request_id,
                model=model_name,
                backend=self.config.backend,
                response=response,
                latency_ms=latency_ms,
                status="success"
            )

            log_metrics(
                request_id=request_id,
                model=model_name,
                backend=self.config.backend,
                task=task_name,
                latency_ms=latency_ms,
                prompt_chars=len(full_prompt),
                response_chars=len(response),
                status="success",
                context_limit=context_stats["context_limit"],
                estimated_tokens=context_stats["estimated_tokens"],
                context_usage_percent=context_stats["usage_percent"]
            )

            return response

        except LLMError as e:
            latency_ms = (time.time() - start_time) * 1000

            log_llm_response(
                request_id=request_id,
                model=model_name,
                backend=self.config.backend,
                response="",
                latency_ms=latency_ms,
                status="error",
                error_message=str(e)
            )

            log_metrics(
                request_id=request_id,
                model=model_name,
                backend=self.config.backend,
                task=task_name,
                latency_ms=latency_ms,
                prompt_chars=len(full_prompt),
                response_chars=0,
                status="error",
                context_limit=context_stats["context_limit"],
                estimated_tokens=context_stats["estimated_tokens"],
                context_usage_percent=context_stats["usage_percent"]
            )

            raise

    def _classify_http_error(self, e: aiohttp.ClientResponseError, model: str) -> LLMError:
        """Map a backend HTTP error status onto the LLMError hierarchy."""
        logger.error(
            f"{self._tag} HTTP error | backend={self.config.backend} | "
            f"model={model} | status={e.status} | message={e.message}"
        )
        if e.status == 413:
            return PayloadTooLargeError(
                f"{self.config.task_name.title()} LLM request too large for model {model}."
            )
        if e.status == 429:
            return RateLimitError(
                f"{self.config.task_name.title()} LLM rate limit reached. Please wait and try again."
            )
        return LLMServiceError(
            f"{self.config.task_name.title()} LLM request failed with status {e.status}.",
            status_code=e.status
        )

    async def _post_json(self, url: str, payload: Dict[str, Any], model: str) -> Dict[str, Any]:
        headers = {}
        if self.config.api_key:
            headers["Authorization"] = f"Bearer {self.config.api_key}"

        try:
            session = await self.get_session()
            async with session.post(url, json=payload, headers=headers) as r:
                r.raise_for_status()
                return await r.json()

        except aiohttp.ClientResponseError as e:
            raise self._classify_http_error(e, model) from e

        except ValueError as e:
            logger.error(
                f"{self._tag} Response body is not JSON | backend={self.config.backend} | "
                f"model={model} | error={e}"
            )
            raise LLMServiceError(
                f"{self.config.task_name.title()} LLM returned an unexpected response."
            ) from e

        except asyncio.TimeoutError as e:
            logger.error(f"{self._tag} Timeout | backend={self.config.backend} | model={model}")
            raise LLMServiceError(
                f"{self.config.task_name.title()} LLM request timed out. Please try again."
            ) from e

        except aiohttp.ClientError as e:
            logger.error(
                f"{self._tag} Request failed | backend={self.config.backend} | "
                f"model={model} | error={e}"
            )
            raise LLMServiceError(
                f"{self.config.task_name.title()} LLM service unavailable. Please try again later."
            ) from e

    async def _call_ollama(
        self,
        prompt: str,
        system_prompt: Optional[str],
        model: str,
        temperature: float
    ) -> str:
        """
        Call Ollama generate API using this instance's configured URL.

        Returns:
            Generated text
        """
        url = f"{self.config.ollama_url}/api/generate"

        payload = {
            "model": model,
            "prompt": prompt,
            "stream": False,
            "options": {
                "temperature": temperature
            }
        }
        if system_prompt:
            payload["system"] = system_prompt

        logger.debug(f"{self._tag} Calling Ollama | url={url} | model={model}")

        response_data = await self._post_json(url, payload, model)
        try:
            return response_data.get("response", "").strip()
        except (TypeError, AttributeError) as e:
            logger.error(f"{self._tag} Unexpected response body | model={model} | error={e}")
            raise LLMServiceError(
                f"{self.config.task_name.title()} LLM returned an unexpected response."
            ) from e

    async def _call_chat_completions(
        self,
        prompt: str,
        system_prompt: Optional[str],
        model: str,
        temperature: float,
        max_tokens: int
    ) -> str:
        """
        Call an OpenAI-compatible chat completions API (Groq or VLLM).

        Returns:
            Generated text
        """
        url = f"{self.config.get_backend_url()}/v1/chat/completions"

        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        payload = {
            "model": model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens
        }

        logger.debug(f"{self._tag} Calling chat completions | url={url} | model={model}")

        response_data = await self._post_json(url, payload, model)
        try:
            return response_data["choices"][0]["message"]["content"].strip()
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            logger.error(f"{self._tag} Unexpected response body | model={model} | error={e}")
            raise LLMServiceError(
                f"{self.config.task_name.title()} LLM returned an unexpected response."
            ) from e
