"""
Tests for the completion client: request shape and error classification.
"""
import json
import asyncio
from unittest.mock import MagicMock

import aiohttp
import pytest

from core import (
    BackoffPolicy,
    BaseLLMClient,
    LLMConfig,
    LLMServiceError,
    PayloadTooLargeError,
    RateLimitError,
)
from summarization import SectionSummarizer


class FakeResponse:
    def __init__(self, status=200, body=None):
        self.status = status
        self.body = body

    def raise_for_status(self):
        if self.status >= 400:
            raise aiohttp.ClientResponseError(
                request_info=MagicMock(),
                history=(),
                status=self.status,
                message="error"
            )

    async def json(self):
        return self.body


class FakeSession:
    """Stands in for aiohttp.ClientSession.post(...) as an async context manager."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []
        self.closed = False

    def post(self, url, json=None, headers=None):
        self.requests.append({"url": url, "json": json, "headers": headers})
        return self

    async def __aenter__(self):
        if self.error is not None:
            raise self.error
        return self.response

    async def __aexit__(self, exc_type, exc, tb):
        return False

    async def close(self):
        self.closed = True


def make_client(session, **overrides):
    config = LLMConfig(task_name="test", **overrides)
    client = BaseLLMClient(config)
    client._session = session
    return client


def completion_body(content):
    return {"choices": [{"message": {"content": content}}]}


@pytest.mark.asyncio
async def test_groq_request_shape():
    session = FakeSession(FakeResponse(body=completion_body("  answer  ")))
    client = make_client(session, backend="groq", api_key="secret", model="m1")

    result = await client.generate_text_with_logging("user text", system_prompt="be nice")

    assert result == "answer"
    request = session.requests[0]
    assert request["url"] == "https://api.groq.com/openai/v1/chat/completions"
    assert request["headers"] == {"Authorization": "Bearer secret"}
    assert request["json"]["model"] == "m1"
    assert request["json"]["messages"] == [
        {"role": "system", "content": "be nice"},
        {"role": "user", "content": "user text"},
    ]


@pytest.mark.asyncio
async def test_ollama_request_shape():
    session = FakeSession(FakeResponse(body={"response": " hello "}))
    client = make_client(session, backend="ollama", ollama_url="http://ollama:11434")

    assert await client.generate_text_with_logging("p", system_prompt="sys") == "hello"
    request = session.requests[0]
    assert request["url"] == "http://ollama:11434/api/generate"
    assert request["json"]["system"] == "sys"
    assert request["headers"] == {}


@pytest.mark.asyncio
@pytest.mark.parametrize("status,error_type", [
    (413, PayloadTooLargeError),
    (429, RateLimitError),
    (500, LLMServiceError),
    (400, LLMServiceError),
])
async def test_http_status_classification(status, error_type):
    client = make_client(FakeSession(FakeResponse(status=status)))

    with pytest.raises(error_type) as exc_info:
        await client.generate_text_with_logging("p")
    assert exc_info.value.status_code == status


@pytest.mark.asyncio
async def test_payload_too_large_is_not_a_rate_limit():
    client = make_client(FakeSession(FakeResponse(status=413)))

    with pytest.raises(PayloadTooLargeError) as exc_info:
        await client.generate_text_with_logging("p")
    assert not isinstance(exc_info.value, RateLimitError)


@pytest.mark.asyncio
@pytest.mark.parametrize("error", [asyncio.TimeoutError(), aiohttp.ClientConnectionError("refused")])
async def test_transport_failures_become_service_errors(error):
    client = make_client(FakeSession(error=error))

    with pytest.raises(LLMServiceError):
        await client.generate_text_with_logging("p")


@pytest.mark.asyncio
async def test_malformed_body_is_service_error():
    client = make_client(FakeSession(FakeResponse(body={"unexpected": True})))

    with pytest.raises(LLMServiceError):
        await client.generate_text_with_logging("p")


@pytest.mark.asyncio
async def test_close_releases_session():
    session = FakeSession()
    client = make_client(session)

    await client.close()

    assert session.closed
    assert client._session is None


def test_config_dict_hides_api_key():
    info = LLMConfig(api_key="secret").to_dict()
    assert "secret" not in info.values()
    assert info["api_key_set"] is True


class NotJsonResponse(FakeResponse):
    async def json(self):
        raise json.JSONDecodeError("Expecting value", "<html>", 0)


@pytest.mark.asyncio
@pytest.mark.parametrize("backend", ["groq", "ollama"])
async def test_non_json_body_is_service_error(backend):
    client = make_client(FakeSession(NotJsonResponse()), backend=backend)

    with pytest.raises(LLMServiceError):
        await client.generate_text_with_logging("p")


@pytest.mark.asyncio
async def test_ollama_non_object_body_is_service_error():
    client = make_client(FakeSession(FakeResponse(body=["not", "an", "object"])), backend="ollama")

    with pytest.raises(LLMServiceError):
        await client.generate_text_with_logging("p")


@pytest.mark.asyncio
async def test_non_json_body_is_retried_by_section_summarizer():
    session = FakeSession(NotJsonResponse())
    client = make_client(session)
    summarizer = SectionSummarizer(client, BackoffPolicy.none(), chunk_overlap=100, max_retries=3)

    with pytest.raises(LLMServiceError):
        await summarizer.summarize("chunk", 0, 1)
    assert len(session.requests) == 4
