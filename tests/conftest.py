import pytest
import sys
from pathlib import Path

from pypdf.generic import (
    ArrayObject,
    DecodedStreamObject,
    DictionaryObject,
    IndirectObject,
    NameObject,
    NumberObject,
)

# Add src to sys.path so we can import diagram_export
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from diagram_export.core.models import ObjectSubgraph  # noqa: E402


WIDE_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="200" height="100" viewBox="0 0 200 100">'
    '<rect x="10" y="10" width="180" height="80" fill="#3366cc"/>'
    '<circle cx="100" cy="50" r="30" fill="#ff9900"/>'
    "</svg>"
)


# Common test fixtures
@pytest.fixture
def wide_svg() -> str:
    """A 200x100 SVG with a couple of filled shapes."""
    return WIDE_SVG


@pytest.fixture
def text_svg() -> str:
    """An SVG containing unstyled text."""
    return (
        '<svg xmlns="http://www.w3.org/2000/svg" width="120" height="40">'
        '<text x="4" y="28" font-size="20">Hello</text>'
        "</svg>"
    )


@pytest.fixture
def sample_subgraph() -> ObjectSubgraph:
    """
    Three-object subgraph in its own id space (10, 11, 12).

    10 is a form referencing a font (11) through its resources; the font
    references a descriptor (12), which points back at the font.
    """
    form = DecodedStreamObject()
    form.set_data(b"0 0 m 1 1 l S")
    form.update(
        {
            NameObject("/Type"): NameObject("/XObject"),
            NameObject("/Subtype"): NameObject("/Form"),
            NameObject("/Resources"): DictionaryObject(
                {
                    NameObject("/Font"): DictionaryObject(
                        {NameObject("/F1"): IndirectObject(11, 0, None)}
                    )
                }
            ),
        }
    )
    font = DictionaryObject(
        {
            NameObject("/Type"): NameObject("/Font"),
            NameObject("/FontDescriptor"): IndirectObject(12, 0, None),
            NameObject("/Widths"): ArrayObject([NumberObject(500), NumberObject(600)]),
        }
    )
    descriptor = DictionaryObject(
        {
            NameObject("/Type"): NameObject("/FontDescriptor"),
            NameObject("/Owner"): ArrayObject([IndirectObject(11, 0, None)]),
        }
    )
    return ObjectSubgraph(objects={10: form, 11: font, 12: descriptor}, root=10)
