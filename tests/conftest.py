"""Shared pytest fixtures for pdf-sidebyside tests."""

from __future__ import annotations

import io
from collections.abc import Callable, Sequence

import pikepdf
import pytest
from reportlab.pdfgen import canvas

# Standard page sizes in points
A4_WIDTH, A4_HEIGHT = 595.28, 841.89
LETTER_WIDTH, LETTER_HEIGHT = 612.0, 792.0

PageDims = tuple[float, float]


def _make_pdf(sizes: Sequence[PageDims]) -> bytes:
    """Create a blank PDF with one page per (width, height) entry."""
    pdf = pikepdf.new()
    for width, height in sizes:
        pdf.add_blank_page(page_size=(width, height))

    buf = io.BytesIO()
    pdf.save(buf)
    return buf.getvalue()


def _make_labeled_pdf(label: str, sizes: Sequence[PageDims]) -> bytes:
    """Create a PDF whose page ``i`` shows the text ``f"{label}{i}"``."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=sizes[0])
    for i, (width, height) in enumerate(sizes):
        c.setPageSize((width, height))
        c.setFont("Helvetica", 10)
        c.drawString(10, height - 20, f"{label}{i}")
        c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture
def make_pdf() -> Callable[[Sequence[PageDims]], bytes]:
    """Factory for blank PDFs of arbitrary page sizes."""
    return _make_pdf


@pytest.fixture
def make_labeled_pdf() -> Callable[[str, Sequence[PageDims]], bytes]:
    """Factory for PDFs with a text label on every page."""
    return _make_labeled_pdf


@pytest.fixture
def a4_pdf() -> bytes:
    """Single-page A4 PDF."""
    return _make_pdf([(A4_WIDTH, A4_HEIGHT)])


@pytest.fixture
def letter_pdf() -> bytes:
    """Single-page US Letter PDF."""
    return _make_pdf([(LETTER_WIDTH, LETTER_HEIGHT)])


@pytest.fixture
def multipage_pdf() -> bytes:
    """Three-page A4 PDF."""
    return _make_pdf([(A4_WIDTH, A4_HEIGHT)] * 3)


@pytest.fixture
def empty_pdf() -> bytes:
    """Valid PDF without any pages."""
    return _make_pdf([])


@pytest.fixture
def encrypted_pdf() -> bytes:
    """Single-page PDF protected by a user password."""
    pdf = pikepdf.new()
    pdf.add_blank_page(page_size=(LETTER_WIDTH, LETTER_HEIGHT))
    buf = io.BytesIO()
    pdf.save(buf, encryption=pikepdf.Encryption(owner="secret", user="secret"))
    return buf.getvalue()
