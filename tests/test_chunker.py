"""
Tests for the recursive text splitter.
"""
import pytest

from chunking import RecursiveTextSplitter, split_text, TextChunk


def rebuild(chunks):
    """Reassemble source text from chunk offsets."""
    text = ""
    for chunk in chunks:
        assert chunk.start <= len(text)
        text += chunk.text[len(text) - chunk.start:]
    return text


SAMPLE_TEXTS = [
    "word " * 1000,
    "x" * 4321,
    ("First paragraph sentence one. Sentence two!\n" * 40 + "\n") * 6,
    "Line with some words\n" * 300,
    "Mixed. Content? Here!\n\nAnother para with a verylongtokenwithoutanyspaces" * 80,
]


def test_empty_text_yields_no_chunks():
    assert split_text("") == []
    assert RecursiveTextSplitter(100, 10).split_chunks("") == []


def test_short_text_is_single_chunk():
    assert split_text("hello world", max_chunk_size=100, overlap=10) == ["hello world"]


def test_text_of_exact_size_is_single_chunk():
    text = "a" * 100
    assert split_text(text, max_chunk_size=100, overlap=10) == [text]


@pytest.mark.parametrize("text", SAMPLE_TEXTS)
def test_chunks_respect_size_limit(text):
    for chunk in split_text(text, max_chunk_size=300, overlap=40):
        assert 0 < len(chunk) <= 300


@pytest.mark.parametrize("text", SAMPLE_TEXTS)
def test_chunks_rebuild_source_text(text):
    chunks = RecursiveTextSplitter(chunk_size=300, chunk_overlap=40).split_chunks(text)
    assert rebuild(chunks) == text


@pytest.mark.parametrize("text", SAMPLE_TEXTS)
def test_consecutive_overlap_is_bounded(text):
    chunks = RecursiveTextSplitter(chunk_size=300, chunk_overlap=40).split_chunks(text)
    for previous, current in zip(chunks, chunks[1:]):
        assert current.start > previous.start
        assert 0 <= previous.end - current.start <= 40


def test_splitting_is_deterministic():
    text = SAMPLE_TEXTS[2]
    assert split_text(text, 250, 30) == split_text(text, 250, 30)


def test_reference_document_splits_into_three_chunks():
    text = "word " * 1000
    chunks = RecursiveTextSplitter(chunk_size=2000, chunk_overlap=100).split_chunks(text)

    assert len(text) == 5000
    assert [(c.start, c.end) for c in chunks] == [(0, 2000), (1900, 3900), (3800, 5000)]
    assert [c.label for c in chunks] == ["1/3", "2/3", "3/3"]


def test_prefers_paragraph_boundary():
    text = "A" * 60 + "\n\n" + "B" * 60
    assert split_text(text, max_chunk_size=100, overlap=10) == ["A" * 60 + "\n\n", "B" * 60]


def test_falls_back_to_sentence_boundary():
    text = "First sentence here. Second sentence here."
    assert split_text(text, max_chunk_size=30, overlap=0) == [
        "First sentence here. ",
        "Second sentence here.",
    ]


def test_hard_cuts_unbroken_text():
    assert split_text("x" * 250, max_chunk_size=100, overlap=10) == ["x" * 100, "x" * 100, "x" * 50]


def test_overlap_is_clamped_below_chunk_size():
    splitter = RecursiveTextSplitter(chunk_size=50, chunk_overlap=500)
    assert splitter.chunk_overlap == 49
    assert all(len(c) <= 50 for c in splitter.split_text("word " * 100))


@pytest.mark.parametrize("size,overlap", [(0, 0), (-5, 0), (100, -1)])
def test_invalid_parameters_raise(size, overlap):
    with pytest.raises(ValueError):
        RecursiveTextSplitter(chunk_size=size, chunk_overlap=overlap)


def test_text_chunk_is_immutable():
    chunk = TextChunk(text="abc", ordinal=0, total=1, start=5)
    assert chunk.end == 8
    with pytest.raises(Exception):
        chunk.text = "changed"
