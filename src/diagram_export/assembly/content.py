"""
Module: assembly.content

Purpose:
    Author the page content stream: an optional full-page background,
    then the embedded drawable painted through a unit-square transform.
    Graphics state is saved and restored around each part.

Key Functions:
    - build_page_content(): Operator list for one page
    - content_stream(): Wrap operators as a PDF stream object

Dependencies:
    - pypdf.generic: ContentStream and operand objects
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from pypdf.generic import ContentStream, DecodedStreamObject, FloatObject, NameObject, PdfObject

from diagram_export.core.models import Placement

Operation = Tuple[List[PdfObject], bytes]


def _numbers(*values: float) -> List[PdfObject]:
    return [FloatObject(value) for value in values]


def build_page_content(
    page_width: float,
    page_height: float,
    placement: Placement,
    drawable_name: str,
    background_rgb: Optional[Sequence[int]] = None,
) -> List[Operation]:
    """
    Build the operator list painting one page.

    Args:
        page_width: Page width in points
        page_height: Page height in points
        placement: Drawn size and offset of the content
        drawable_name: Resource name of the embedded form, e.g. "/S1"
        background_rgb: Optional (r, g, b) bytes for a solid page fill

    Returns:
        List of (operands, operator) pairs in paint order
    """
    operations: List[Operation] = []
    if background_rgb is not None:
        red, green, blue = (channel / 255.0 for channel in background_rgb)
        operations += [
            ([], b"q"),
            (_numbers(red, green, blue), b"rg"),
            (_numbers(0.0, 0.0, page_width, page_height), b"re"),
            ([], b"f"),
            ([], b"Q"),
        ]
    operations += [
        ([], b"q"),
        (_numbers(*placement.as_matrix()), b"cm"),
        ([NameObject(drawable_name)], b"Do"),
        ([], b"Q"),
    ]
    return operations


def content_stream(operations: List[Operation]) -> DecodedStreamObject:
    """Serialize operations into an uncompressed stream object."""
    content = ContentStream(None, None)
    content.operations = operations
    stream = DecodedStreamObject()
    stream.set_data(content.get_data())
    return stream
