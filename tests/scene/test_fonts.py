"""
Unit tests for font enumeration and preferred-family resolution.

Font enumeration runs against temporary directories seeded with the
TrueType files bundled with reportlab, so the results do not depend on
the host's installed fonts.
"""

import shutil
from pathlib import Path

import pytest
import reportlab

from diagram_export.scene import (
    list_fonts,
    parse_font_family_stack,
    resolve_preferred_font_family,
)

REPORTLAB_FONTS = Path(reportlab.__file__).resolve().parent / "fonts"


@pytest.fixture
def font_dir(tmp_path):
    """Directory holding two Vera faces, a nested copy and a broken file."""
    regular = REPORTLAB_FONTS / "Vera.ttf"
    bold = REPORTLAB_FONTS / "VeraBd.ttf"
    if not regular.exists() or not bold.exists():
        pytest.skip("reportlab bundled fonts not available")
    shutil.copy(regular, tmp_path / "Vera.ttf")
    shutil.copy(bold, tmp_path / "VeraBd.TTF")
    nested = tmp_path / "nested"
    nested.mkdir()
    shutil.copy(regular, nested / "copy.ttf")
    (tmp_path / "broken.ttf").write_bytes(b"not a font")
    (tmp_path / "readme.txt").write_text("ignored")
    return tmp_path


class TestListFonts:
    """Tests for list_fonts()."""

    def test_list_fonts_when_duplicates_then_sorted_unique(self, font_dir):
        assert list_fonts([font_dir]) == ["Bitstream Vera Sans"]

    def test_list_fonts_when_directory_missing_then_empty(self, tmp_path):
        assert list_fonts([tmp_path / "nope"]) == []

    def test_list_fonts_when_only_broken_files_then_empty(self, tmp_path):
        (tmp_path / "bad.otf").write_bytes(b"\x00\x01")
        assert list_fonts([tmp_path]) == []


class TestParseFontFamilyStack:
    """Tests for parse_font_family_stack()."""

    def test_parse_when_quoted_and_generic_then_concrete_names_only(self):
        stack = "'JetBrains Mono', \"Fira Code\", Menlo, monospace, system-ui"
        assert parse_font_family_stack(stack) == ["JetBrains Mono", "Fira Code", "Menlo"]

    @pytest.mark.parametrize("stack", ["", None, "serif, sans-serif", " , ,"])
    def test_parse_when_nothing_concrete_then_empty(self, stack):
        assert parse_font_family_stack(stack) == []


class TestResolvePreferredFontFamily:
    """Tests for resolve_preferred_font_family()."""

    def test_resolve_when_later_family_installed_then_installed_spelling(self):
        installed = ["DejaVu Sans", "Menlo"]
        assert resolve_preferred_font_family("Inter, menlo, monospace", installed) == "Menlo"

    def test_resolve_when_none_installed_then_first_candidate(self):
        assert resolve_preferred_font_family("Inter, Roboto", ["Arial"]) == "Inter"

    def test_resolve_when_only_generic_then_helvetica(self):
        assert resolve_preferred_font_family("sans-serif", ["Arial"]) == "Helvetica"
