"""
Core Models Package

Data models shared by the layout engine, the renderer adapters and the
document assembler.

Geometry models are frozen dataclasses: a layout is computed once per
conversion and never adjusted afterwards. ObjectSubgraph is a plain
container because renderers fill it incrementally.
"""

from .geometry import PageCandidate, LayoutResult, Placement
from .subgraph import ObjectSubgraph, iter_references

__all__ = [
    "PageCandidate",
    "LayoutResult",
    "Placement",
    "ObjectSubgraph",
    "iter_references",
]
