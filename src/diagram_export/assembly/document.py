"""
Module: assembly.document

Purpose:
    Build the single-page container document around a rendered subgraph
    and serialize it to bytes in memory.

    Identifier layout of every document:
        1 catalog, 2 page tree, 3 page, 4 content stream, 5 document info,
        6.. merged subgraph (root first when the renderer emits it first)

Key Functions:
    - assemble_document(): Merge a subgraph into a fresh container document

Key Classes:
    - ContainerDocument: Identified objects plus trailer references

Dependencies:
    - pypdf.generic: PDF object model and primitive encoding
    - assembly.merge: Subgraph renumbering
    - assembly.content: Page content stream

Used By:
    - converter.to_page()
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import Dict, Optional, Sequence

from pypdf.generic import (
    ArrayObject,
    DictionaryObject,
    FloatObject,
    NameObject,
    NumberObject,
    PdfObject,
    create_string_object,
)

from diagram_export.core.models import LayoutResult, ObjectSubgraph, Placement, iter_references
from diagram_export.errors import InternalInvariantError

from .content import build_page_content, content_stream
from .ids import IdAllocator, ref
from .merge import renumber

logger = logging.getLogger(__name__)

PDF_HEADER = b"%PDF-1.7\n%\xe2\xe3\xcf\xd3\n"
PRODUCER = "Diagram Export"
DRAWABLE_NAME = "/S1"


@dataclass
class ContainerDocument:
    """
    Complete set of objects for one output file.

    Attributes:
        objects: Identifier -> body for every object, identifiers dense from 1
        catalog_id: Identifier of the document catalog
        info_id: Identifier of the document information dictionary
        page_id: Identifier of the single page
        drawable_id: Identifier of the merged root drawable
    """

    objects: Dict[int, PdfObject]
    catalog_id: int
    info_id: int
    page_id: int
    drawable_id: int

    @property
    def object_count(self) -> int:
        """Number of identified objects."""
        return len(self.objects)

    def unresolved_references(self) -> set[int]:
        """Reference targets that have no object in this document."""
        targets = {r.idnum for body in self.objects.values() for r in iter_references(body)}
        return targets - set(self.objects)

    def to_bytes(self) -> bytes:
        """
        Serialize as a complete PDF file.

        Objects are written in identifier order followed by a classic
        cross-reference table and a trailer naming the catalog and info.

        Returns:
            PDF file contents
        """
        size = max(self.objects) + 1
        buffer = io.BytesIO()
        buffer.write(PDF_HEADER)

        offsets: Dict[int, int] = {}
        for obj_id in range(1, size):
            offsets[obj_id] = buffer.tell()
            buffer.write(f"{obj_id} 0 obj\n".encode("ascii"))
            self.objects[obj_id].write_to_stream(buffer)
            buffer.write(b"\nendobj\n")

        xref_offset = buffer.tell()
        buffer.write(f"xref\n0 {size}\n".encode("ascii"))
        buffer.write(b"0000000000 65535 f \n")
        for obj_id in range(1, size):
            buffer.write(f"{offsets[obj_id]:010d} 00000 n \n".encode("ascii"))

        trailer = DictionaryObject(
            {
                NameObject("/Size"): NumberObject(size),
                NameObject("/Root"): ref(self.catalog_id),
                NameObject("/Info"): ref(self.info_id),
            }
        )
        buffer.write(b"trailer\n")
        trailer.write_to_stream(buffer)
        buffer.write(f"\nstartxref\n{xref_offset}\n%%EOF\n".encode("ascii"))
        return buffer.getvalue()


def assemble_document(
    subgraph: ObjectSubgraph,
    layout: LayoutResult,
    placement: Placement,
    *,
    background_rgb: Optional[Sequence[int]] = None,
) -> ContainerDocument:
    """
    Build the container document for one page.

    The five fixed identifiers are issued before the subgraph is touched;
    the subgraph is then renumbered from the same allocator and its root
    becomes the page's drawable.

    Args:
        subgraph: Rendered content with its own identifier space
        layout: Page size and scale
        placement: Drawn size and offsets
        background_rgb: Optional page fill colour as three bytes

    Returns:
        ContainerDocument ready for to_bytes()

    Raises:
        InternalInvariantError: If the subgraph root cannot be resolved
    """
    alloc = IdAllocator()
    catalog_id = alloc.bump()
    page_tree_id = alloc.bump()
    page_id = alloc.bump()
    content_id = alloc.bump()
    info_id = alloc.bump()

    merged = renumber(subgraph, alloc)
    drawable_id = merged.resolve(subgraph.root)
    if drawable_id is None or drawable_id in merged.dangling:
        raise InternalInvariantError(
            f"Failed to map subgraph root {subgraph.root} into the container document"
        )

    objects: Dict[int, PdfObject] = {
        catalog_id: DictionaryObject(
            {
                NameObject("/Type"): NameObject("/Catalog"),
                NameObject("/Pages"): ref(page_tree_id),
            }
        ),
        page_tree_id: DictionaryObject(
            {
                NameObject("/Type"): NameObject("/Pages"),
                NameObject("/Kids"): ArrayObject([ref(page_id)]),
                NameObject("/Count"): NumberObject(1),
            }
        ),
        page_id: _page(page_tree_id, content_id, drawable_id, layout),
        content_id: content_stream(
            build_page_content(
                layout.page_width,
                layout.page_height,
                placement,
                DRAWABLE_NAME,
                background_rgb,
            )
        ),
        info_id: DictionaryObject(
            {NameObject("/Producer"): create_string_object(PRODUCER)}
        ),
    }
    objects.update(merged.objects)

    document = ContainerDocument(
        objects=objects,
        catalog_id=catalog_id,
        info_id=info_id,
        page_id=page_id,
        drawable_id=drawable_id,
    )
    logger.debug(
        f"Assembled document with {document.object_count} objects "
        f"({len(merged.id_map)} merged, drawable {drawable_id})"
    )
    return document


def _page(parent_id: int, content_id: int, drawable_id: int, layout: LayoutResult) -> DictionaryObject:
    """Page dictionary with the drawable exposed under DRAWABLE_NAME."""
    resources = DictionaryObject(
        {
            NameObject("/XObject"): DictionaryObject(
                {NameObject(DRAWABLE_NAME): ref(drawable_id)}
            )
        }
    )
    return DictionaryObject(
        {
            NameObject("/Type"): NameObject("/Page"),
            NameObject("/Parent"): ref(parent_id),
            NameObject("/MediaBox"): ArrayObject(
                [
                    FloatObject(0),
                    FloatObject(0),
                    FloatObject(layout.page_width),
                    FloatObject(layout.page_height),
                ]
            ),
            NameObject("/Resources"): resources,
            NameObject("/Contents"): ref(content_id),
        }
    )
