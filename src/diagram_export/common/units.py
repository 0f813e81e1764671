"""
Module: common.units

Purpose:
    Unit constants and conversions shared by the layout engine, the
    options resolver and the raster exporter. PDF user space is fixed at
    72 units per inch; SVG user units are tied to a caller-chosen density.

Key Functions:
    - clamp(): Bound a value to a closed range
    - svg_units_to_points(): Convert SVG user units to PDF points
    - round_half_up(): Round positive lengths the way pixel sizes are rounded

Dependencies:
    - reportlab.lib.units: Points-per-inch constant
    - reportlab.lib.pagesizes: Default page size

Used By:
    - layout.fit: Margin clamping and scale selection
    - options.resolver: Default page dimensions and ranges
    - raster.export: Pixel dimension rounding
"""

from __future__ import annotations

import math

from reportlab.lib.pagesizes import letter
from reportlab.lib.units import inch

POINTS_PER_INCH = float(inch)

# Density range accepted for SVG unit conversion
MIN_DPI = POINTS_PER_INCH
MAX_DPI = 300.0

# US Letter, portrait
DEFAULT_PAGE_WIDTH_PT, DEFAULT_PAGE_HEIGHT_PT = (float(v) for v in letter)

# Layout guards
FIT_EPSILON = 1e-6
MAX_MARGIN_RATIO = 0.49
MIN_AVAILABLE_PT = 1.0


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(value, high))


def svg_units_to_points(svg_units: float, dpi: float) -> float:
    """
    Convert a length in SVG user units to PDF points.

    The density is clamped to [72, 300] so the physical size of the
    placed content never depends on an out-of-range caller value.

    Args:
        svg_units: Length in source units
        dpi: Source density in units per inch

    Returns:
        Length in points (1/72 inch)

    Example:
        >>> svg_units_to_points(200, 96)
        150.0
    """
    safe_dpi = clamp(dpi, MIN_DPI, MAX_DPI)
    return svg_units * POINTS_PER_INCH / safe_dpi


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)
