"""Shared pytest fixtures for the docflow test suite."""
import io
from dataclasses import dataclass
from typing import List

import pytest
import requests
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas as pdfcanvas

from docflow.document_builder import (
    DocumentBuilder,
    FontManager,
    HtmlTranslator,
    Page,
    StyleState,
    TableLayout,
    TextLayout,
)


@dataclass
class DrawCall:
    text: str
    font_name: str
    size: float
    x: float
    y: float


def make_pdf(pages: int = 1, label: str = "remote") -> bytes:
    """Build a small PDF whose pages each carry `label` and their page number."""
    buffer = io.BytesIO()
    c = pdfcanvas.Canvas(buffer, pagesize=A4)
    for number in range(1, pages + 1):
        c.drawString(72, 720, f"{label} {number}")
        c.showPage()
    c.save()
    return buffer.getvalue()


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, content: bytes = b"", status_code: int = 200):
        self.content = content
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


@pytest.fixture
def canvas():
    return pdfcanvas.Canvas(io.BytesIO(), pagesize=A4)


@pytest.fixture
def page(canvas):
    width, height = A4
    p = Page(canvas, width, height)
    p.move_to(25, height - 25)
    return p


@pytest.fixture
def style():
    return StyleState()


@pytest.fixture
def font_manager():
    return FontManager()


@pytest.fixture
def text_layout(style, font_manager):
    return TextLayout(style, font_manager)


@pytest.fixture
def table_layout(text_layout):
    return TableLayout(text_layout)


@pytest.fixture
def translator(text_layout, table_layout):
    return HtmlTranslator(text_layout, table_layout)


@pytest.fixture
def text_calls(page, monkeypatch) -> List[DrawCall]:
    """Record every text draw on `page` together with the position it was drawn at."""
    calls: List[DrawCall] = []
    original = page.draw_text

    def record(text, font_name, size, color, opacity=1.0, x=None, y=None, rotate=0):
        calls.append(DrawCall(
            text=text,
            font_name=font_name,
            size=size,
            x=page.x if x is None else x,
            y=page.y if y is None else y,
        ))
        return original(text, font_name, size, color, opacity, x, y, rotate)

    monkeypatch.setattr(page, "draw_text", record)
    return calls


@pytest.fixture
def builder():
    b = DocumentBuilder()
    b.add_new_page()
    return b


@pytest.fixture
def fake_get(monkeypatch):
    """Route requests.get to a dict of url -> FakeResponse (or exception) and log requested URLs."""
    responses = {}
    requested: List[str] = []

    def get(url, timeout=None):
        requested.append(url)
        response = responses.get(url, FakeResponse(status_code=404))
        if isinstance(response, Exception):
            raise response
        return response

    monkeypatch.setattr("docflow.document_builder.pdf_fetcher.requests.get", get)
    get.responses = responses
    get.requested = requested
    return get
