"""
End-to-end tests for summarize_document_async.
"""
import pytest

from core import EmptyDocumentError
from summarization import SummarizerConfig, summarize_document_async
from fakes import FakeCompletionClient


@pytest.fixture
def config():
    return SummarizerConfig(chunk_size=2000, chunk_overlap=100, batch_size=3, max_retries=3, model="test-model")


@pytest.mark.asyncio
async def test_combined_summary_preserves_section_order(config, echo_client, backoff):
    result = await summarize_document_async("word " * 1000, config=config, client=echo_client, backoff=backoff)

    assert result["summary"] == "summary-of-chunk-0\n\nsummary-of-chunk-1\n\nsummary-of-chunk-2"
    assert result["total_chunks"] == 3
    assert result["total_chars"] == 5000
    assert result["batches"] == 1
    assert result["model"] == "test-model"
    assert [c["task"] for c in echo_client.calls] == ["summarize_section"] * 3 + ["summarize_combine"]
    assert not echo_client.closed


@pytest.mark.asyncio
async def test_short_document_uses_section_summary_directly(config, echo_client, backoff):
    result = await summarize_document_async("A short note.", config=config, client=echo_client, backoff=backoff)

    assert result["summary"] == "summary-of-chunk-0"
    assert result["total_chunks"] == 1
    assert len(echo_client.calls) == 1
    assert "combine" not in backoff.events


@pytest.mark.asyncio
@pytest.mark.parametrize("text", ["", "   \n\t  "])
async def test_empty_document_raises(text, config, echo_client, backoff):
    with pytest.raises(EmptyDocumentError):
        await summarize_document_async(text, config=config, client=echo_client, backoff=backoff)
    assert echo_client.calls == []


@pytest.mark.asyncio
async def test_section_prompts_carry_chunk_labels(config, backoff):
    client = FakeCompletionClient(lambda prompt, **kw: "s")

    await summarize_document_async("word " * 1000, config=config, client=client, backoff=backoff)

    section_prompts = client.prompts[:3]
    for i, prompt in enumerate(section_prompts):
        assert f"Text (part {i + 1} of 3):" in prompt
