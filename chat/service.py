"""
Chat Service

FastAPI endpoint for single-turn chat about an uploaded document.
"""
import uuid
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from core import BackoffPolicy, BaseLLMClient, PayloadTooLargeError, RateLimitError
from logs.logging_config import RequestContext
from .llm_client import create_llm_client
from .responder import ChatResponder, default_backoff_policy
from .schemas import ChatRequest, ChatResponse, ChatErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Chat"])


# =====================
# Dependencies
# =====================

async def get_chat_client():
    """Request-scoped chat LLM client."""
    client = create_llm_client()
    try:
        yield client
    finally:
        await client.close()


def get_backoff_policy() -> BackoffPolicy:
    return default_backoff_policy()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ChatErrorResponse(error=message).model_dump()
    )


# =====================
# API Endpoints
# =====================

@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={
        400: {"model": ChatErrorResponse},
        413: {"model": ChatErrorResponse},
        429: {"model": ChatErrorResponse},
        500: {"model": ChatErrorResponse},
    }
)
async def chat_endpoint(
    request: ChatRequest,
    client: BaseLLMClient = Depends(get_chat_client),
    backoff: BackoffPolicy = Depends(get_backoff_policy),
):
    """
    Answer a chat message.

    **Request Body:**
    - `message`: User message (required)

    **Returns:**
    - `response`, `status="success"` on success
    - `error`, `status="error"` with 400 / 413 / 429 / 500
    """
    request_id = str(uuid.uuid4())

    with RequestContext(request_id):
        if not request.message:
            logger.warning(f"[CHAT] REJECTED | request_id={request_id} | reason=no_message")
            return _error(400, "No message provided")

        logger.info(f"[CHAT] START | request_id={request_id} | chars={len(request.message)}")

        responder = ChatResponder(client, backoff=backoff)

        try:
            response = await responder.respond(request.message)

        except PayloadTooLargeError as e:
            logger.error(f"[CHAT] ERROR | request_id={request_id} | error={e}")
            return _error(413, "Message too long. Please try a shorter message.")

        except RateLimitError as e:
            logger.error(f"[CHAT] ERROR | request_id={request_id} | error={e}")
            return _error(429, "Too many requests. Please wait a moment and try again.")

        except Exception as e:
            logger.error(f"[CHAT] ERROR | request_id={request_id} | error={type(e).__name__}: {e}")
            return _error(500, "Error processing chat request")

        logger.info(f"[CHAT] END | request_id={request_id} | response_chars={len(response)}")
        return ChatResponse(response=response)
