"""Tests for helper functions and fetcher configuration."""
import base64

import pytest

from docflow.document_builder import PdfFetcher
from docflow.exceptions import ImageEmbedError, InvalidUrlError
from docflow.utils import (
    clean_filename,
    decode_base64_image,
    format_file_size,
    normalize_urls,
    validate_url,
)


def test_decode_base64_image_accepts_data_uri_and_raw():
    payload = base64.b64encode(b"\x89PNG").decode("ascii")

    assert decode_base64_image(payload) == b"\x89PNG"
    assert decode_base64_image("data:image/png;base64," + payload) == b"\x89PNG"


@pytest.mark.parametrize("data", ["", None, "data:image/png;base64,***"])
def test_decode_base64_image_rejects_invalid(data):
    with pytest.raises(ImageEmbedError):
        decode_base64_image(data)


@pytest.mark.parametrize("url", ["http://example.com/a.pdf", "https://example.com"])
def test_validate_url_accepts_http(url):
    assert validate_url(url) == url


@pytest.mark.parametrize("url", ["", None, "file:///etc/passwd", "example.com/a.pdf", "https://"])
def test_validate_url_rejects_others(url):
    with pytest.raises(InvalidUrlError):
        validate_url(url)


def test_normalize_urls():
    assert normalize_urls("https://a.test/x.pdf") == ["https://a.test/x.pdf"]
    assert normalize_urls("https://a.test/x.pdf\n\n  https://b.test/y.pdf ") == [
        "https://a.test/x.pdf",
        "https://b.test/y.pdf",
    ]
    assert normalize_urls(["", " https://a.test/x.pdf", None]) == ["https://a.test/x.pdf"]
    assert normalize_urls(None) == []


def test_clean_filename():
    assert clean_filename("/tmp/My Report (final).pdf") == "My_Report_final"
    assert clean_filename("???.pdf") == "document"


@pytest.mark.parametrize("size,expected", [
    (512, "512 B"),
    (2048, "2.0 KB"),
    (3 * 1024 * 1024, "3.0 MB"),
])
def test_format_file_size(size, expected):
    assert format_file_size(size) == expected


def test_fetch_timeout_from_environment(monkeypatch):
    monkeypatch.setenv("DOCFLOW_FETCH_TIMEOUT", "7.5")

    assert PdfFetcher().timeout == 7.5
    assert PdfFetcher(timeout=3).timeout == 3


def test_fetch_timeout_default(monkeypatch):
    monkeypatch.delenv("DOCFLOW_FETCH_TIMEOUT", raising=False)

    assert PdfFetcher().timeout == 30
