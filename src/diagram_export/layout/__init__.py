"""
Module: layout

Purpose:
    Page layout for the vector-to-page conversion: orientation and scale
    selection plus content placement.

Key Functions:
    - fit_scale(): Largest uniform scale for one page
    - select_layout(): Best of several candidate pages
    - select_best_layout(): Portrait vs landscape
    - place_content(): Drawn size and centring offsets

Used By:
    - converter: to_page()
"""

from .fit import (
    effective_margin,
    fit_scale,
    select_layout,
    select_best_layout,
    place_content,
)

__all__ = [
    "effective_margin",
    "fit_scale",
    "select_layout",
    "select_best_layout",
    "place_content",
]
