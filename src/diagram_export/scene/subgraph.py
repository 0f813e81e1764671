"""
Module: scene.subgraph

Purpose:
    Render a parsed scene into an embeddable PDF object subgraph.
    PyMuPDF converts the scene to a one-page PDF; pypdf reads that page
    back and its content and resources are wrapped into a Form XObject.
    The form's /Matrix maps the page box onto the unit square, so the
    page content stream can place it with a single scale-and-translate.

Key Functions:
    - render_subgraph(): SourceDocument -> ObjectSubgraph

Dependencies:
    - fitz (PyMuPDF): SVG to PDF conversion
    - pypdf: Reading the converted page as typed objects

Used By:
    - converter.to_page()
"""

from __future__ import annotations

import io
import logging
from collections import deque
from typing import Deque, Dict

from pypdf import PageObject, PdfReader
from pypdf.errors import PdfReadError
from pypdf.generic import (
    ArrayObject,
    DecodedStreamObject,
    DictionaryObject,
    FloatObject,
    IndirectObject,
    NameObject,
    NumberObject,
    PdfObject,
)

from diagram_export.core.models import ObjectSubgraph, iter_references
from diagram_export.errors import InvalidGeometryError, SourceParseError

from .parser import SourceDocument

logger = logging.getLogger(__name__)


def render_subgraph(scene: SourceDocument, *, raster_scale: float = 4.0) -> ObjectSubgraph:
    """
    Render a scene as a Form XObject plus everything it references.

    The form is the subgraph root and is emitted first; referenced
    objects follow in breadth-first discovery order. Identifiers are
    those of the intermediate PDF, the form taking the next free one.

    Args:
        scene: Parsed scene
        raster_scale: Resolution factor for rasterised effects. PyMuPDF
            emits every SVG primitive as vectors, so it does not change
            the output of this backend.

    Returns:
        ObjectSubgraph rooted at the form

    Raises:
        SourceParseError: If the converted scene cannot be read back
    """
    try:
        pdf_bytes = scene.document.convert_to_pdf()
        reader = PdfReader(io.BytesIO(pdf_bytes))
        page = reader.pages[0]
    except (RuntimeError, ValueError, PdfReadError, IndexError) as e:
        raise SourceParseError(f"Failed to render SVG: {e}") from e

    box = page.mediabox
    left, bottom = float(box.left), float(box.bottom)
    width, height = float(box.width), float(box.height)
    if not (width > 0 and height > 0):
        raise InvalidGeometryError(f"Rendered SVG page has invalid size {width}x{height}")

    form = DecodedStreamObject()
    form.set_data(_page_content(page))
    form.update(
        {
            NameObject("/Type"): NameObject("/XObject"),
            NameObject("/Subtype"): NameObject("/Form"),
            NameObject("/FormType"): NumberObject(1),
            NameObject("/BBox"): ArrayObject(
                [
                    FloatObject(left),
                    FloatObject(bottom),
                    FloatObject(left + width),
                    FloatObject(bottom + height),
                ]
            ),
            NameObject("/Matrix"): ArrayObject(
                [
                    FloatObject(1.0 / width),
                    FloatObject(0),
                    FloatObject(0),
                    FloatObject(1.0 / height),
                    FloatObject(-left / width),
                    FloatObject(-bottom / height),
                ]
            ),
        }
    )
    resources = page.get(NameObject("/Resources"))
    if resources is not None:
        form[NameObject("/Resources")] = resources
    form = form.flate_encode()

    objects = _collect(form)
    root = max(objects, default=0) + 1
    subgraph = ObjectSubgraph(objects={root: form, **objects}, root=root)
    logger.debug(
        f"Rendered subgraph with {len(subgraph.objects)} objects "
        f"(raster scale {raster_scale:g})"
    )
    return subgraph


def _page_content(page: PageObject) -> bytes:
    """Decoded content of a page, all content streams concatenated."""
    contents = page.get_contents()
    if contents is None:
        return b""
    return contents.get_data()


def _collect(root_body: PdfObject) -> Dict[int, PdfObject]:
    """
    Resolve every indirect object reachable from a body.

    Returns:
        Identifier -> resolved body in breadth-first discovery order
    """
    found: Dict[int, PdfObject] = {}
    queue: Deque[IndirectObject] = deque(iter_references(root_body))
    while queue:
        reference = queue.popleft()
        if reference.idnum in found:
            continue
        body = reference.get_object()
        if body is None:
            continue
        found[reference.idnum] = body
        queue.extend(iter_references(body))
    return found
