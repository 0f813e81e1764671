"""
Module: raster

Purpose:
    PNG export of parsed scenes.

Key Functions:
    - raster_dimensions(): Pixel size for a scaled source
    - render_png(): Scene -> PNG bytes
"""

from .export import raster_dimensions, render_png

__all__ = [
    "raster_dimensions",
    "render_png",
]
