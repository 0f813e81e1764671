"""
Module: scene.parser

Purpose:
    Parse SVG source text into a sized scene backed by a PyMuPDF document.
    Optionally applies a default font family to text that declares none.

Key Functions:
    - parse_scene(): SVG text -> SourceDocument
    - apply_default_font_family(): Inject font-family on the root element

Key Classes:
    - SourceDocument: Parsed scene with intrinsic size

Dependencies:
    - fitz (PyMuPDF): SVG interpretation
    - xml.etree.ElementTree (std): Well-formedness check

Used By:
    - converter: to_page(), to_raster()
"""

from __future__ import annotations

import html
import logging
import re
from dataclasses import dataclass
from typing import Optional
from xml.etree import ElementTree

import fitz

from diagram_export.errors import SourceParseError

logger = logging.getLogger(__name__)

_ROOT_TAG = re.compile(r"(<(?:[A-Za-z_][\w.-]*:)?svg)(?=[\s/>])([^>]*)>", re.S)
_COMMENT = re.compile(r"<!--.*?-->", re.S)


@dataclass
class SourceDocument:
    """
    Parsed SVG scene.

    Owns an open PyMuPDF document; use as a context manager or call
    close() when done.

    Attributes:
        text: SVG text actually handed to the interpreter
        width: Intrinsic width in source units
        height: Intrinsic height in source units
        document: Open PyMuPDF document (one page)

    Example:
        >>> with parse_scene(svg_text) as scene:
        ...     scene.width, scene.height
        (200.0, 100.0)
    """

    text: str
    width: float
    height: float
    document: fitz.Document

    @property
    def page(self) -> fitz.Page:
        """The scene's single page."""
        return self.document[0]

    def close(self) -> None:
        """Release the PyMuPDF document."""
        self.document.close()

    def __enter__(self) -> SourceDocument:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def parse_scene(source_text: str, *, font_family: Optional[str] = None) -> SourceDocument:
    """
    Parse SVG text into a sized scene.

    Args:
        source_text: SVG document text
        font_family: Default family for text without one (None keeps the
            interpreter's default)

    Returns:
        SourceDocument; the caller must close it

    Raises:
        SourceParseError: If the text is not well-formed XML, the root is
            not an svg element, or PyMuPDF cannot interpret it
    """
    if not isinstance(source_text, str) or not source_text.strip():
        raise SourceParseError("SVG source is empty")

    try:
        root = ElementTree.fromstring(source_text)
    except ElementTree.ParseError as e:
        raise SourceParseError(f"SVG is not well-formed XML: {e}") from e

    local_name = root.tag.rsplit("}", 1)[-1]
    if local_name != "svg":
        raise SourceParseError(f"Root element is <{local_name}>, expected <svg>")

    text = source_text
    if font_family:
        text = apply_default_font_family(text, font_family)

    try:
        document = fitz.open(stream=text.encode("utf-8"), filetype="svg")
    except (RuntimeError, ValueError) as e:
        raise SourceParseError(f"Failed to parse SVG: {e}") from e

    if document.page_count < 1:
        document.close()
        raise SourceParseError("SVG produced no drawable page")

    rect = document[0].rect
    logger.debug(f"Parsed SVG scene {rect.width:.2f}x{rect.height:.2f} units")
    return SourceDocument(text=text, width=rect.width, height=rect.height, document=document)


def apply_default_font_family(source_text: str, font_family: str) -> str:
    """
    Declare a font family on the root svg element.

    Descendants inherit it, so only text without its own family changes.
    A root that already sets font-family (attribute or style) is left
    alone.

    Args:
        source_text: SVG document text
        font_family: Family name to apply

    Returns:
        SVG text with the attribute added, or the input unchanged
    """
    family = font_family.strip()
    if not family:
        return source_text

    comments = [m.span() for m in _COMMENT.finditer(source_text)]
    for match in _ROOT_TAG.finditer(source_text):
        if any(start <= match.start() < end for start, end in comments):
            continue
        if "font-family" in match.group(2):
            return source_text
        insert_at = match.end(1)
        attribute = f' font-family="{html.escape(family, quote=True)}"'
        return source_text[:insert_at] + attribute + source_text[insert_at:]
    return source_text
