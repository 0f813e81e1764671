"""
Module: converter

Purpose:
    Public conversion operations.
    to_page:   Parse → Measure → Layout → Render subgraph → Assemble → Bytes
    to_raster: Parse → Rasterise → Encode

Each call is a pure function of its inputs: identifier counters, id maps
and pixel buffers are created per call and discarded on return.

Key Functions:
    - to_page(): SVG text -> single-page PDF bytes
    - to_raster(): SVG text -> PNG bytes
    - list_fonts(): Installed font families

Dependencies:
    - options: Options resolution
    - layout: Page fit and placement
    - scene: Parsing, font enumeration, subgraph rendering
    - assembly: Container document
    - raster: PNG export

Used By:
    - Application front ends (command handlers)
"""

from __future__ import annotations

import logging
import math
import time
from typing import Any, List, Mapping, Optional, Union

from diagram_export.assembly import assemble_document
from diagram_export.common.units import svg_units_to_points
from diagram_export.errors import InvalidGeometryError
from diagram_export.layout import place_content, select_best_layout
from diagram_export.options import (
    PageOptions,
    RasterOptions,
    resolve_page_options,
    resolve_raster_options,
)
from diagram_export.raster import render_png
from diagram_export.scene import parse_scene, render_subgraph, resolve_preferred_font_family
from diagram_export.scene import list_fonts as _list_host_fonts

logger = logging.getLogger(__name__)


def to_page(
    source_text: str,
    options: Union[Mapping[str, Any], PageOptions, None] = None,
) -> bytes:
    """
    Convert SVG text into a single-page PDF.

    The page is the requested candidate in whichever orientation lets the
    content grow largest inside the margin; the content is centred on the
    full page.

    preferredFontFamily is read as a CSS font stack; the first installed
    family in it is applied to unstyled text.

    Args:
        source_text: SVG document text
        options: camelCase options bag (rasterScale, dpi, preferredFontFamily,
            pageBackgroundRgb, pageWidthPt, pageHeightPt, pageMarginPt),
            a PageOptions, or None for defaults

    Returns:
        PDF file contents

    Raises:
        SourceParseError: If the text is not a well-formed SVG scene
        InvalidGeometryError: If the source size is not strictly positive
        InternalInvariantError: If the rendered subgraph cannot be merged

    Example:
        >>> pdf = to_page('<svg xmlns="http://www.w3.org/2000/svg" width="200" height="100"/>')
        >>> pdf[:8]
        b'%PDF-1.7'
    """
    start_time = time.perf_counter()
    config = resolve_page_options(options)

    font_family = _preferred_family(config.preferred_font_family)
    with parse_scene(source_text, font_family=font_family) as scene:
        source_width_pt = svg_units_to_points(scene.width, config.dpi)
        source_height_pt = svg_units_to_points(scene.height, config.dpi)
        _check_geometry(source_width_pt, source_height_pt)

        layout = select_best_layout(
            source_width_pt,
            source_height_pt,
            config.page_width_pt,
            config.page_height_pt,
            config.page_margin_pt,
        )
        placement = place_content(source_width_pt, source_height_pt, layout)
        subgraph = render_subgraph(scene, raster_scale=config.raster_scale)

    document = assemble_document(
        subgraph,
        layout,
        placement,
        background_rgb=config.page_background_rgb,
    )
    pdf_bytes = document.to_bytes()

    elapsed = time.perf_counter() - start_time
    logger.info(
        f"Converted SVG to {layout.page_width:g}x{layout.page_height:g}pt page "
        f"({len(pdf_bytes)} bytes, {elapsed:.3f}s)"
    )
    return pdf_bytes


def to_raster(
    source_text: str,
    options: Union[Mapping[str, Any], RasterOptions, None] = None,
) -> bytes:
    """
    Convert SVG text into a PNG image.

    preferredFontFamily is read as a CSS font stack; the first installed
    family in it is applied to unstyled text.

    Args:
        source_text: SVG document text
        options: camelCase options bag (rasterScale, pngQuality,
            preferredFontFamily), a RasterOptions, or None for defaults

    Returns:
        PNG file contents

    Raises:
        SourceParseError: If the text is not a well-formed SVG scene
        InvalidGeometryError: If the source size is not strictly positive
        AllocationError: If the pixel buffer cannot be allocated
    """
    config = resolve_raster_options(options)
    font_family = _preferred_family(config.preferred_font_family)
    with parse_scene(source_text, font_family=font_family) as scene:
        _check_geometry(scene.width, scene.height, unit="px")
        png_bytes = render_png(scene, config.raster_scale)
    logger.info(f"Converted SVG to PNG ({len(png_bytes)} bytes, scale {config.raster_scale:g})")
    return png_bytes


def list_fonts() -> List[str]:
    """Installed font families, sorted and de-duplicated."""
    return _list_host_fonts()


def _preferred_family(font_stack: Optional[str]) -> Optional[str]:
    """Installed family for a CSS font stack, or None when no stack is given."""
    if not font_stack:
        return None
    family = resolve_preferred_font_family(font_stack, _list_host_fonts())
    logger.debug(f"Resolved font stack {font_stack!r} to {family!r}")
    return family


def _check_geometry(width: float, height: float, unit: str = "pt") -> None:
    if not (math.isfinite(width) and math.isfinite(height) and width > 0 and height > 0):
        raise InvalidGeometryError(
            f"SVG has invalid dimensions: {width!r}x{height!r}{unit}"
        )
