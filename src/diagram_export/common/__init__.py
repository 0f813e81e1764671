"""Common constants and unit helpers shared across the package."""

from __future__ import annotations

from .units import (
    POINTS_PER_INCH,
    MIN_DPI,
    MAX_DPI,
    DEFAULT_PAGE_WIDTH_PT,
    DEFAULT_PAGE_HEIGHT_PT,
    FIT_EPSILON,
    MAX_MARGIN_RATIO,
    MIN_AVAILABLE_PT,
    clamp,
    svg_units_to_points,
    round_half_up,
)

__all__ = [
    "POINTS_PER_INCH",
    "MIN_DPI",
    "MAX_DPI",
    "DEFAULT_PAGE_WIDTH_PT",
    "DEFAULT_PAGE_HEIGHT_PT",
    "FIT_EPSILON",
    "MAX_MARGIN_RATIO",
    "MIN_AVAILABLE_PT",
    "clamp",
    "svg_units_to_points",
    "round_half_up",
]
