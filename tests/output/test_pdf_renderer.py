"""
Tests for PDF rendering of page frames.

The written PDF is opened with PyMuPDF to check page count and size.
"""

import asyncio

import fitz
import pytest

from offset_border.layout import MasterConfig, PackingConfig
from offset_border.output import render_pages_to_pdf
from offset_border.output.renderer import DEFAULT_DPI
from offset_border.pipeline import run_master
from offset_border.settings import BorderSettings


@pytest.fixture
def packed(document, make_rect):
    """Document with photos packed onto two 1200x1000 page frames."""
    document.selection = [make_rect(1920, 1080, y=i * 1200) for i in range(3)]
    config = MasterConfig(packing=PackingConfig(page_width=1200, page_height=1000, margin=20))
    result = asyncio.run(run_master(document, BorderSettings(stroke_width=4), config))
    return document, result


class TestRenderPagesToPdf:
    """Tests for render_pages_to_pdf()."""

    def test_render_when_frames_given_then_one_pdf_page_each(self, packed, tmp_path):
        # Arrange
        document, result = packed
        output = tmp_path / "out" / "pages.pdf"

        # Act
        count = render_pages_to_pdf(document, result.pages, output)

        # Assert
        assert count == 2
        with fitz.open(output) as pdf:
            assert pdf.page_count == 2

    def test_render_when_default_dpi_then_page_size_in_points(self, packed, tmp_path):
        document, result = packed
        output = tmp_path / "pages.pdf"

        render_pages_to_pdf(document, result.pages, output)

        with fitz.open(output) as pdf:
            rect = pdf[0].rect
        assert rect.width == pytest.approx(1200 * 72 / DEFAULT_DPI)
        assert rect.height == pytest.approx(1000 * 72 / DEFAULT_DPI)

    def test_render_when_frames_none_then_renders_all_page_frames(self, packed, tmp_path):
        document, _ = packed
        output = tmp_path / "all.pdf"

        count = render_pages_to_pdf(document, None, output)

        assert count == 2

    def test_render_when_borders_drawn_then_page_has_vector_paths(self, packed, tmp_path):
        """Border strokes come out as drawings on the page."""
        document, result = packed
        output = tmp_path / "pages.pdf"

        render_pages_to_pdf(document, result.pages, output)

        with fitz.open(output) as pdf:
            drawings = pdf[0].get_drawings()
        assert len(drawings) >= 2
