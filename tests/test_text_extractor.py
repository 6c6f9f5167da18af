"""
Tests for text extraction from uploads.
"""
import fitz
import pytest

from core import ExtractionError
from text_extractor import TextExtractor


def make_pdf(*pages):
    doc = fitz.open()
    for text in pages:
        page = doc.new_page()
        page.insert_text((72, 72), text)
    data = doc.tobytes()
    doc.close()
    return data


def test_plain_text_is_decoded():
    assert TextExtractor().extract("Grüße".encode("utf-8"), "text/plain") == "Grüße"


def test_missing_content_type_is_treated_as_text():
    assert TextExtractor().extract(b"hello", None) == "hello"


def test_invalid_utf8_is_replaced():
    assert TextExtractor().extract(b"ok \xff", "text/plain") == "ok \ufffd"


def test_pdf_pages_are_extracted_in_order():
    text = TextExtractor().extract(make_pdf("First page", "Second page"), "application/pdf")

    assert "First page" in text
    assert "Second page" in text
    assert text.index("First page") < text.index("Second page")


def test_pdf_content_type_parameters_are_ignored():
    text = TextExtractor().extract(make_pdf("Hello"), "Application/PDF; name=doc.pdf")
    assert "Hello" in text


def test_invalid_pdf_raises_extraction_error():
    with pytest.raises(ExtractionError):
        TextExtractor().extract(b"this is not a pdf", "application/pdf")
