"""
End-to-end tests for the public conversion operations.

SVG text goes in, PDF or PNG bytes come out; the output is read back
with pypdf, PyMuPDF and Pillow to check what a viewer would see.
"""

import io
import re

import fitz
import pytest
from PIL import Image
from pypdf import PdfReader

import diagram_export
from diagram_export import (
    InvalidGeometryError,
    SourceParseError,
    list_fonts,
    to_page,
    to_raster,
)


DEGENERATE_SVGS = [
    '<svg xmlns="http://www.w3.org/2000/svg" width="0" height="100">'
    '<rect width="10" height="10"/></svg>',
    '<svg xmlns="http://www.w3.org/2000/svg" width="-5" height="100">'
    '<rect width="10" height="10"/></svg>',
    '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 0 0"></svg>',
]


def _record_font_family(monkeypatch):
    """Wrap parse_scene in the converter and record the font family it receives."""
    applied = []
    real_parse_scene = diagram_export.converter.parse_scene

    def recording_parse_scene(source_text, *, font_family=None):
        applied.append(font_family)
        return real_parse_scene(source_text, font_family=font_family)

    monkeypatch.setattr(diagram_export.converter, "parse_scene", recording_parse_scene)
    return applied


def _page_content(pdf_bytes: bytes) -> bytes:
    reader = PdfReader(io.BytesIO(pdf_bytes))
    return reader.pages[0].get_contents().get_data()


class TestToPage:
    """Tests for to_page()."""

    def test_to_page_when_wide_svg_then_landscape_letter(self, wide_svg):
        pdf_bytes = to_page(wide_svg)

        reader = PdfReader(io.BytesIO(pdf_bytes))

        assert len(reader.pages) == 1
        assert [float(v) for v in reader.pages[0].mediabox] == [0, 0, 792, 612]
        assert reader.metadata.producer == "Diagram Export"

    def test_to_page_when_wide_svg_then_drawing_centred_on_page(self, wide_svg):
        content = _page_content(to_page(wide_svg))

        match = re.search(rb"([\d.]+) 0(?:\.0)? 0(?:\.0)? ([\d.]+) ([\d.]+) ([\d.]+) cm", content)

        assert match is not None
        width, height, x, y = (float(v) for v in match.groups())
        assert width / height == pytest.approx(2.0)
        assert x + width / 2 == pytest.approx(396)
        assert y + height / 2 == pytest.approx(306)
        assert x >= 36 - 1e-6 and y >= 36 - 1e-6

    def test_to_page_when_opened_with_pymupdf_then_page_renders(self, wide_svg):
        with fitz.open(stream=to_page(wide_svg), filetype="pdf") as document:
            page = document[0]
            assert (page.rect.width, page.rect.height) == pytest.approx((792, 612))
            pix = page.get_pixmap()
            assert (pix.width, pix.height) == (792, 612)

    def test_to_page_when_called_twice_then_byte_identical(self, wide_svg):
        assert to_page(wide_svg) == to_page(wide_svg)

    def test_to_page_when_defaults_explicit_then_same_as_none(self, wide_svg):
        explicit = {
            "rasterScale": 4,
            "dpi": 96,
            "pageWidthPt": 612,
            "pageHeightPt": 792,
            "pageMarginPt": 36,
        }
        assert to_page(wide_svg, explicit) == to_page(wide_svg, None)

    def test_to_page_when_background_then_fill_before_drawable(self, wide_svg):
        content = _page_content(to_page(wide_svg, {"pageBackgroundRgb": [255, 255, 255]}))
        assert b"rg" in content
        assert content.index(b"re") < content.index(b"Do")

    def test_to_page_when_no_background_then_no_fill(self, wide_svg):
        content = _page_content(to_page(wide_svg))
        assert b"rg" not in content

    def test_to_page_when_tall_svg_then_portrait(self):
        svg = '<svg xmlns="http://www.w3.org/2000/svg" width="100" height="300"/>'
        reader = PdfReader(io.BytesIO(to_page(svg)))
        assert [float(v) for v in reader.pages[0].mediabox] == [0, 0, 612, 792]

    def test_to_page_when_text_and_font_then_pdf_readable(self, text_svg):
        pdf_bytes = to_page(text_svg, {"preferredFontFamily": "Courier"})
        assert len(PdfReader(io.BytesIO(pdf_bytes)).pages) == 1

    def test_to_page_when_invalid_svg_then_source_parse_error(self):
        with pytest.raises(SourceParseError):
            to_page("<svg")

    @pytest.mark.parametrize("svg", DEGENERATE_SVGS)
    def test_to_page_when_degenerate_size_then_invalid_geometry(self, svg):
        with pytest.raises(InvalidGeometryError, match="invalid dimensions"):
            to_page(svg)

    def test_to_page_when_font_stack_then_first_installed_family_applied(self, monkeypatch, text_svg):
        applied = _record_font_family(monkeypatch)
        monkeypatch.setattr(diagram_export.converter, "_list_host_fonts", lambda: ["DejaVu Sans", "Menlo"])

        to_page(text_svg, {"preferredFontFamily": "'Nope Sans', menlo, monospace"})

        assert applied == ["Menlo"]


class TestToRaster:
    """Tests for to_raster()."""

    def test_to_raster_when_defaults_then_scale_two(self, wide_svg):
        image = Image.open(io.BytesIO(to_raster(wide_svg)))
        assert image.size == (400, 200)

    def test_to_raster_when_quality_then_scale_from_quality(self, wide_svg):
        image = Image.open(io.BytesIO(to_raster(wide_svg, {"pngQuality": 10})))
        assert image.size == (200, 100)

    @pytest.mark.parametrize("svg", DEGENERATE_SVGS)
    def test_to_raster_when_degenerate_size_then_invalid_geometry(self, svg):
        with pytest.raises(InvalidGeometryError, match="invalid dimensions"):
            to_raster(svg)

    def test_to_raster_when_font_stack_not_installed_then_first_candidate(self, monkeypatch, text_svg):
        applied = _record_font_family(monkeypatch)
        monkeypatch.setattr(diagram_export.converter, "_list_host_fonts", lambda: [])

        to_raster(text_svg, {"preferredFontFamily": "Inter, sans-serif"})

        assert applied == ["Inter"]

    def test_to_raster_when_no_font_stack_then_nothing_applied(self, monkeypatch, wide_svg):
        applied = _record_font_family(monkeypatch)
        to_raster(wide_svg)
        assert applied == [None]

    def test_to_raster_when_invalid_svg_then_source_parse_error(self):
        with pytest.raises(SourceParseError):
            to_raster("")


class TestListFonts:
    """Tests for list_fonts()."""

    def test_list_fonts_when_called_then_sorted_and_unique(self):
        families = list_fonts()
        assert families == sorted(set(families))
