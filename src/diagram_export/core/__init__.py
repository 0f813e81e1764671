"""Core data models for diagram_export."""

from .models import LayoutResult, ObjectSubgraph, PageCandidate, Placement

__all__ = [
    "PageCandidate",
    "LayoutResult",
    "Placement",
    "ObjectSubgraph",
]
