"""
Module: raster.export

Purpose:
    Render a scene to a PNG at a uniform scale. There is no page or
    margin here: the image is exactly the scaled source size.

Key Functions:
    - raster_dimensions(): Pixel size for a source size and scale
    - render_png(): Scene -> PNG bytes

Dependencies:
    - fitz (PyMuPDF): Scene rasterisation
    - PIL.Image: Pixel buffer and PNG encoding
    - common.units: round_half_up

Used By:
    - converter.to_raster()
"""

from __future__ import annotations

import io
import logging
from typing import Tuple

import fitz
from PIL import Image

from diagram_export.common.units import round_half_up
from diagram_export.errors import AllocationError
from diagram_export.scene.parser import SourceDocument

logger = logging.getLogger(__name__)


def raster_dimensions(width: float, height: float, scale: float) -> Tuple[int, int]:
    """
    Pixel dimensions of a scaled source, at least 1 pixel per axis.

    Example:
        >>> raster_dimensions(200, 100, 2.0)
        (400, 200)
        >>> raster_dimensions(0.1, 0.1, 1.0)
        (1, 1)
    """
    return (
        max(round_half_up(width * scale), 1),
        max(round_half_up(height * scale), 1),
    )


def render_png(scene: SourceDocument, scale: float) -> bytes:
    """
    Render a scene into a transparent RGBA buffer and encode it as PNG.

    Args:
        scene: Parsed scene
        scale: Uniform pixel scale (source units to pixels)

    Returns:
        PNG file contents

    Raises:
        AllocationError: If the pixel buffer cannot be allocated
    """
    size = raster_dimensions(scene.width, scene.height, scale)

    try:
        canvas = Image.new("RGBA", size, (0, 0, 0, 0))
    except (MemoryError, ValueError) as e:
        raise AllocationError(f"Failed to allocate {size[0]}x{size[1]} pixel buffer: {e}") from e

    try:
        pix = scene.page.get_pixmap(matrix=fitz.Matrix(scale, scale), alpha=True)
    except (MemoryError, RuntimeError) as e:
        raise AllocationError(f"Failed to rasterize {size[0]}x{size[1]} scene: {e}") from e

    rendered = Image.frombytes("RGBA", (pix.width, pix.height), pix.samples)
    # Pixmap bounds are rounded outward by PyMuPDF; the buffer size is authoritative
    canvas.paste(rendered, (0, 0))

    buffer = io.BytesIO()
    canvas.save(buffer, format="PNG")
    logger.debug(f"Encoded {size[0]}x{size[1]} PNG at scale {scale:g}")
    return buffer.getvalue()
