"""
Module: scene

Purpose:
    Adapters around the SVG collaborators: parsing, host font
    enumeration and rendering into an embeddable object subgraph.

Key Functions:
    - parse_scene(): SVG text -> SourceDocument
    - render_subgraph(): SourceDocument -> ObjectSubgraph
    - list_fonts(): Installed font families
    - resolve_preferred_font_family(): Pick a family from a CSS font stack

Dependencies:
    - fitz (PyMuPDF): SVG interpretation and conversion
    - pypdf: Typed PDF objects
    - PIL.ImageFont: Font face inspection
"""

from .parser import SourceDocument, parse_scene, apply_default_font_family
from .subgraph import render_subgraph
from .fonts import (
    list_fonts,
    parse_font_family_stack,
    resolve_preferred_font_family,
    system_font_dirs,
)

__all__ = [
    "SourceDocument",
    "parse_scene",
    "apply_default_font_family",
    "render_subgraph",
    "list_fonts",
    "parse_font_family_stack",
    "resolve_preferred_font_family",
    "system_font_dirs",
]
