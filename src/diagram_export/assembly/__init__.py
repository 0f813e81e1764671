"""
Module: assembly

Purpose:
    PDF object-graph assembly: identifier allocation, subgraph
    renumbering, page and content stream construction, byte output.

Key Functions:
    - assemble_document(): Build the container document for one page
    - renumber(): Relabel a subgraph into the container's identifier space

Key Classes:
    - ContainerDocument: Identified objects plus trailer references
    - IdAllocator: Monotonic identifier counter
    - MergeResult: Renumbered objects and mapping

Dependencies:
    - pypdf.generic: PDF object model

Used By:
    - converter: to_page()
"""

from .ids import IdAllocator
from .merge import MergeResult, renumber
from .content import build_page_content, content_stream
from .document import ContainerDocument, assemble_document, DRAWABLE_NAME, PRODUCER

__all__ = [
    "IdAllocator",
    "MergeResult",
    "renumber",
    "build_page_content",
    "content_stream",
    "ContainerDocument",
    "assemble_document",
    "DRAWABLE_NAME",
    "PRODUCER",
]
