"""
LLM Logging

Central logging setup for the service:
- Console + rotating file handlers
- request_id / user_id injected into every record via contextvars
- Request, response and metrics records for every LLM call
"""
import json
import uuid
import logging
import contextvars
from dataclasses import dataclass, asdict
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from config import estimate_tokens, CONTEXT_WARNING_THRESHOLD, CONTEXT_ERROR_THRESHOLD
from .config import (
    LOG_OUTPUT_DIR,
    LOG_LEVEL,
    LOG_MAX_BYTES,
    LOG_BACKUP_COUNT,
    LOG_PREVIEW_LENGTH,
    LOG_DATE_FORMAT,
    LOG_FILE_FORMAT,
    LOG_CONSOLE_FORMAT,
    LOG_METRICS_FORMAT,
    LOG_FILE_SERVICE,
    LOG_FILE_ERRORS,
    LOG_FILE_METRICS,
)

LOG_DIR = Path(LOG_OUTPUT_DIR)

LLM_LOGGER_NAME = "docqa.llm"
METRICS_LOGGER_NAME = "docqa.metrics"

_request_id_var: contextvars.ContextVar[str] = contextvars.ContextVar("request_id", default="-")
_user_id_var: contextvars.ContextVar[str] = contextvars.ContextVar("user_id", default="-")

_configured = False


# =========================
# Log Records
# =========================

@dataclass
class LLMRequestLog:
    request_id: str
    timestamp: str
    model: str
    backend: str
    task: str
    prompt_chars: int
    prompt_preview: str
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None


@dataclass
class LLMResponseLog:
    request_id: str
    timestamp: str
    model: str
    backend: str
    status: str
    latency_ms: float
    response_chars: int
    response_preview: str
    error_message: Optional[str] = None


@dataclass
class LLMMetrics:
    request_id: str
    timestamp: str
    model: str
    backend: str
    task: str
    latency_ms: float
    prompt_chars: int
    response_chars: int
    status: str
    context_limit: Optional[int] = None
    estimated_tokens: Optional[int] = None
    context_usage_percent: Optional[float] = None


# =========================
# Context
# =========================

class ContextFilter(logging.Filter):
    """Attach request_id and user_id from the current context to each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = _request_id_var.get()
        record.user_id = _user_id_var.get()
        return True


def generate_request_id() -> str:
    return str(uuid.uuid4())


def get_request_id() -> str:
    return _request_id_var.get()


class RequestContext:
    """
    Context manager binding a request id (and optional user id) to all logs
    emitted inside the block, including from concurrent tasks it spawns.

    Example:
        with RequestContext(request_id):
            await summarize_document_async(...)
    """

    def __init__(self, request_id: Optional[str] = None, user_id: Optional[str] = None):
        self.request_id = request_id or generate_request_id()
        self.user_id = user_id
        self._request_token = None
        self._user_token = None

    def __enter__(self) -> "RequestContext":
        self._request_token = _request_id_var.set(self.request_id)
        if self.user_id:
            self._user_token = _user_id_var.set(self.user_id)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        _request_id_var.reset(self._request_token)
        if self._user_token is not None:
            _user_id_var.reset(self._user_token)


# =========================
# Setup
# =========================

def _file_handler(filename: str, level: int, fmt: str) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        LOG_DIR / filename,
        maxBytes=LOG_MAX_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=LOG_DATE_FORMAT))
    handler.addFilter(ContextFilter())
    return handler


def setup_llm_logging(log_to_file: bool = True) -> None:
    """
    Configure application logging. Safe to call more than once.

    Args:
        log_to_file: Also write rotating files under LOG_DIR
    """
    global _configured
    if _configured:
        return

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    console = logging.StreamHandler()
    console.setLevel(getattr(logging, LOG_LEVEL.upper(), logging.INFO))
    console.setFormatter(logging.Formatter(LOG_CONSOLE_FORMAT, datefmt=LOG_DATE_FORMAT))
    console.addFilter(ContextFilter())
    root.addHandler(console)

    if log_to_file:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        root.addHandler(_file_handler(LOG_FILE_SERVICE, logging.INFO, LOG_FILE_FORMAT))
        root.addHandler(_file_handler(LOG_FILE_ERRORS, logging.ERROR, LOG_FILE_FORMAT))

        metrics = logging.getLogger(METRICS_LOGGER_NAME)
        metrics.propagate = False
        metrics.addHandler(_file_handler(LOG_FILE_METRICS, logging.INFO, LOG_METRICS_FORMAT))

    _configured = True
    root.info(f"[LOGGING] Configured | level={LOG_LEVEL} | file_logging={log_to_file} | dir={LOG_DIR}")


def get_llm_logger() -> logging.Logger:
    """Logger used by the LLM client and pipeline stages."""
    return logging.getLogger(LLM_LOGGER_NAME)


def get_metrics_logger() -> logging.Logger:
    """Logger receiving one JSON line per LLM call."""
    return logging.getLogger(METRICS_LOGGER_NAME)


# =========================
# LLM Call Logging
# =========================

def _preview(text: str) -> str:
    if len(text) <= LOG_PREVIEW_LENGTH:
        return text
    return text[:LOG_PREVIEW_LENGTH] + "..."


def _now() -> str:
    return datetime.now().isoformat()


def log_llm_request(
    model: str,
    backend: str,
    task: str,
    prompt: str,
    temperature: Optional[float] = None,
    max_tokens: Optional[int] = None,
) -> str:
    """Log an outgoing LLM request. Returns the id used to correlate the response."""
    call_id = generate_request_id()
    entry = LLMRequestLog(
        request_id=call_id,
        timestamp=_now(),
        model=model,
        backend=backend,
        task=task,
        prompt_chars=len(prompt),
        prompt_preview=_preview(prompt),
        temperature=temperature,
        max_tokens=max_tokens,
    )
    logger = get_llm_logger()
    logger.info(
        f"[LLM_REQUEST] call_id={call_id} | task={task} | model={model} | "
        f"backend={backend} | prompt_chars={entry.prompt_chars}"
    )
    logger.debug(f"[LLM_REQUEST] call_id={call_id} | preview={entry.prompt_preview!r}")
    return call_id


def log_llm_response(
    request_id: str,
    model: str,
    backend: str,
    response: str,
    latency_ms: float,
    status: str,
    error_message: Optional[str] = None,
) -> None:
    entry = LLMResponseLog(
        request_id=request_id,
        timestamp=_now(),
        model=model,
        backend=backend,
        status=status,
        latency_ms=round(latency_ms, 2),
        response_chars=len(response),
        response_preview=_preview(response),
        error_message=error_message,
    )
    logger = get_llm_logger()
    if status == "success":
        logger.info(
            f"[LLM_RESPONSE] call_id={request_id} | status={status} | "
            f"latency_ms={entry.latency_ms} | response_chars={entry.response_chars}"
        )
    else:
        logger.error(
            f"[LLM_RESPONSE] call_id={request_id} | status={status} | "
            f"latency_ms={entry.latency_ms} | error={error_message}"
        )


def log_metrics(
    request_id: str,
    model: str,
    backend: str,
    task: str,
    latency_ms: float,
    prompt_chars: int,
    response_chars: int,
    status: str,
    context_limit: Optional[int] = None,
    estimated_tokens: Optional[int] = None,
    context_usage_percent: Optional[float] = None,
) -> None:
    metrics = LLMMetrics(
        request_id=request_id,
        timestamp=_now(),
        model=model,
        backend=backend,
        task=task,
        latency_ms=round(latency_ms, 2),
        prompt_chars=prompt_chars,
        response_chars=response_chars,
        status=status,
        context_limit=context_limit,
        estimated_tokens=estimated_tokens,
        context_usage_percent=context_usage_percent,
    )
    get_metrics_logger().info(json.dumps(asdict(metrics)))


def log_context_usage(
    request_id: str,
    model: str,
    prompt: str,
    context_limit: int,
) -> dict:
    """
    Estimate how much of the model context a prompt uses and warn when close to the limit.

    Returns:
        dict with 'context_limit', 'estimated_tokens' and 'usage_percent'
    """
    estimated = estimate_tokens(prompt)
    usage_percent = round((estimated / context_limit) * 100, 2) if context_limit else 0.0

    logger = get_llm_logger()
    if usage_percent >= CONTEXT_ERROR_THRESHOLD:
        logger.error(
            f"[CONTEXT] call_id={request_id} | model={model} | tokens={estimated} | "
            f"limit={context_limit} | usage={usage_percent}%"
        )
    elif usage_percent >= CONTEXT_WARNING_THRESHOLD:
        logger.warning(
            f"[CONTEXT] call_id={request_id} | model={model} | tokens={estimated} | "
            f"limit={context_limit} | usage={usage_percent}%"
        )

    return {
        "context_limit": context_limit,
        "estimated_tokens": estimated,
        "usage_percent": usage_percent,
    }
