"""
Module: options

Purpose:
    Options resolution for the page and raster conversions.

Key Functions:
    - resolve_page_options(): Page-path options bag -> PageOptions
    - resolve_raster_options(): Raster-path options bag -> RasterOptions
    - png_quality_to_scale(): PNG quality percentage -> raster scale
"""

from .resolver import (
    PageOptions,
    RasterOptions,
    resolve_page_options,
    resolve_raster_options,
    png_quality_to_scale,
)

__all__ = [
    "PageOptions",
    "RasterOptions",
    "resolve_page_options",
    "resolve_raster_options",
    "png_quality_to_scale",
]
