"""
Module: options.resolver

Purpose:
    Turn a loosely-typed options bag (camelCase keys, as sent by a front
    end) into frozen, fully-populated option objects. The resolver never
    rejects input: missing fields take defaults, out-of-range numbers are
    clamped and unusable values fall back to the default with a warning.

Key Functions:
    - resolve_page_options(): Options for the vector-to-page path
    - resolve_raster_options(): Options for the raster path
    - png_quality_to_scale(): Map a PNG quality percentage to a raster scale

Key Classes:
    - PageOptions: Resolved page-path options
    - RasterOptions: Resolved raster-path options

Dependencies:
    - PIL.ImageColor: CSS colour strings for page backgrounds
    - common.units: Ranges and default page size

Used By:
    - converter: to_page(), to_raster()
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple, Union

from PIL import ImageColor

from diagram_export.common.units import (
    DEFAULT_PAGE_HEIGHT_PT,
    DEFAULT_PAGE_WIDTH_PT,
    MAX_DPI,
    MIN_DPI,
    POINTS_PER_INCH,
    clamp,
)

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]

MIN_RASTER_SCALE = 1.0
MAX_RASTER_SCALE = 8.0
DEFAULT_PAGE_RASTER_SCALE = 4.0
DEFAULT_PNG_RASTER_SCALE = 2.0
DEFAULT_DPI = 96.0
DEFAULT_PAGE_MARGIN_PT = 36.0

MIN_PNG_QUALITY = 10
MAX_PNG_QUALITY = 100
DEFAULT_PNG_QUALITY = 85


@dataclass(frozen=True)
class PageOptions:
    """
    Resolved options for the vector-to-page conversion (immutable).

    Attributes:
        raster_scale: Resolution factor handed to the subgraph renderer [1, 8]
        dpi: Source density used for unit conversion [72, 300]
        preferred_font_family: Default font family for unstyled text, or None
        page_background_rgb: Solid page background, or None for transparent
        page_width_pt: Candidate page width in points (>= 72)
        page_height_pt: Candidate page height in points (>= 72)
        page_margin_pt: Margin bounding the achievable scale (>= 0)

    Example:
        >>> resolve_page_options(None) == PageOptions()
        True
    """

    raster_scale: float = DEFAULT_PAGE_RASTER_SCALE
    dpi: float = DEFAULT_DPI
    preferred_font_family: Optional[str] = None
    page_background_rgb: Optional[RGB] = None
    page_width_pt: float = DEFAULT_PAGE_WIDTH_PT
    page_height_pt: float = DEFAULT_PAGE_HEIGHT_PT
    page_margin_pt: float = DEFAULT_PAGE_MARGIN_PT


@dataclass(frozen=True)
class RasterOptions:
    """
    Resolved options for the raster conversion (immutable).

    Attributes:
        raster_scale: Uniform pixel scale [1, 8]
        preferred_font_family: Default font family for unstyled text, or None
    """

    raster_scale: float = DEFAULT_PNG_RASTER_SCALE
    preferred_font_family: Optional[str] = None


def resolve_page_options(
    options: Union[Mapping[str, Any], PageOptions, None] = None,
) -> PageOptions:
    """
    Resolve a page-path options bag.

    Args:
        options: Mapping with camelCase keys, an existing PageOptions, or None

    Returns:
        PageOptions with every field populated and in range

    Example:
        >>> resolve_page_options({"dpi": 600, "pageMarginPt": -5})
        PageOptions(raster_scale=4.0, dpi=300.0, ..., page_margin_pt=0.0)
    """
    if isinstance(options, PageOptions):
        options = _page_options_as_bag(options)
    bag = _as_bag(options)

    raster_scale = clamp(
        _number(bag, "rasterScale", DEFAULT_PAGE_RASTER_SCALE),
        MIN_RASTER_SCALE,
        MAX_RASTER_SCALE,
    )
    dpi = clamp(_number(bag, "dpi", DEFAULT_DPI), MIN_DPI, MAX_DPI)
    page_width = max(_number(bag, "pageWidthPt", DEFAULT_PAGE_WIDTH_PT), POINTS_PER_INCH)
    page_height = max(_number(bag, "pageHeightPt", DEFAULT_PAGE_HEIGHT_PT), POINTS_PER_INCH)
    margin = max(_number(bag, "pageMarginPt", DEFAULT_PAGE_MARGIN_PT), 0.0)

    return PageOptions(
        raster_scale=raster_scale,
        dpi=dpi,
        preferred_font_family=_font_family(bag),
        page_background_rgb=_background(bag.get("pageBackgroundRgb")),
        page_width_pt=page_width,
        page_height_pt=page_height,
        page_margin_pt=margin,
    )


def resolve_raster_options(
    options: Union[Mapping[str, Any], RasterOptions, None] = None,
) -> RasterOptions:
    """
    Resolve a raster-path options bag.

    ``rasterScale`` wins over ``pngQuality``; the quality percentage is
    only consulted when no explicit scale is given.

    Args:
        options: Mapping with camelCase keys, an existing RasterOptions, or None

    Returns:
        RasterOptions with every field populated and in range
    """
    if isinstance(options, RasterOptions):
        options = {
            "rasterScale": options.raster_scale,
            "preferredFontFamily": options.preferred_font_family,
        }
    bag = _as_bag(options)

    if bag.get("rasterScale") is None and bag.get("pngQuality") is not None:
        default_scale = png_quality_to_scale(bag["pngQuality"])
    else:
        default_scale = DEFAULT_PNG_RASTER_SCALE

    raster_scale = clamp(
        _number(bag, "rasterScale", default_scale),
        MIN_RASTER_SCALE,
        MAX_RASTER_SCALE,
    )
    return RasterOptions(raster_scale=raster_scale, preferred_font_family=_font_family(bag))


def png_quality_to_scale(quality: Any) -> float:
    """
    Map a PNG quality percentage to a raster scale.

    PNG is lossless, so "quality" only controls resolution: 10% maps to
    1x and 100% to 4x, rounded to two decimals.

    Args:
        quality: Percentage, clamped to [10, 100]; unusable values use 85

    Returns:
        Raster scale in [1, 4]

    Example:
        >>> png_quality_to_scale(85)
        3.5
    """
    value = _coerce_number(quality)
    if value is None:
        percent = DEFAULT_PNG_QUALITY
    else:
        percent = int(clamp(math.floor(value + 0.5), MIN_PNG_QUALITY, MAX_PNG_QUALITY))
    normalized = (percent - MIN_PNG_QUALITY) / (MAX_PNG_QUALITY - MIN_PNG_QUALITY)
    return round(1 + normalized * 3, 2)


def _as_bag(options: Optional[Mapping[str, Any]]) -> Mapping[str, Any]:
    if options is None:
        return {}
    if not isinstance(options, Mapping):
        logger.warning(f"Ignoring options of type {type(options).__name__}, using defaults")
        return {}
    return options


def _page_options_as_bag(options: PageOptions) -> dict[str, Any]:
    return {
        "rasterScale": options.raster_scale,
        "dpi": options.dpi,
        "preferredFontFamily": options.preferred_font_family,
        "pageBackgroundRgb": options.page_background_rgb,
        "pageWidthPt": options.page_width_pt,
        "pageHeightPt": options.page_height_pt,
        "pageMarginPt": options.page_margin_pt,
    }


def _coerce_number(value: Any) -> Optional[float]:
    """Finite float from an int/float/numeric string, else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _number(bag: Mapping[str, Any], key: str, default: float) -> float:
    raw = bag.get(key)
    if raw is None:
        return default
    value = _coerce_number(raw)
    if value is None:
        logger.warning(f"Option {key}={raw!r} is not a finite number, using {default}")
        return default
    return value


def _font_family(bag: Mapping[str, Any]) -> Optional[str]:
    raw = bag.get("preferredFontFamily")
    if not isinstance(raw, str):
        return None
    family = raw.strip()
    return family or None


def _background(raw: Any) -> Optional[RGB]:
    """
    Resolve a page background colour.

    Accepts a 3-item sequence of channel values (rounded and clamped to
    [0, 255]) or a CSS colour string understood by PIL.ImageColor.
    """
    if raw is None:
        return None
    if isinstance(raw, str):
        try:
            rgb = ImageColor.getrgb(raw.strip())
        except ValueError:
            logger.warning(f"Ignoring unparseable page background {raw!r}")
            return None
        return (rgb[0], rgb[1], rgb[2])
    if isinstance(raw, (list, tuple)) and len(raw) == 3:
        channels = [_coerce_number(c) for c in raw]
        if all(c is not None for c in channels):
            return tuple(int(clamp(math.floor(c + 0.5), 0, 255)) for c in channels)  # type: ignore[return-value]
    logger.warning(f"Ignoring page background {raw!r}: expected [r, g, b]")
    return None
