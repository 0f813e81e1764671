"""
Module: layout.fit

Purpose:
    Page-fit algorithm. Chooses the page orientation and the uniform scale
    that make the source as large as possible inside a margin, then centres
    the drawing on the full page.

Key Functions:
    - fit_scale(): Largest uniform scale for one page size
    - select_layout(): Best of several candidate pages (declaration order wins ties)
    - select_best_layout(): Portrait vs landscape for one baseline page
    - place_content(): Drawn size and centring offsets

Dependencies:
    - core.models: PageCandidate, LayoutResult, Placement
    - common.units: Epsilon and margin guards

Used By:
    - converter.to_page(): Page layout before assembly
"""

from __future__ import annotations

import logging
from typing import Sequence

from diagram_export.common.units import FIT_EPSILON, MAX_MARGIN_RATIO, MIN_AVAILABLE_PT
from diagram_export.core.models import LayoutResult, PageCandidate, Placement

logger = logging.getLogger(__name__)


def effective_margin(page_width: float, page_height: float, margin: float) -> float:
    """
    Clamp a margin so the usable area stays strictly positive.

    The margin is capped at 49% of each page dimension and floored at 0.
    """
    return max(min(margin, page_width * MAX_MARGIN_RATIO, page_height * MAX_MARGIN_RATIO), 0.0)


def fit_scale(
    source_width: float,
    source_height: float,
    page_width: float,
    page_height: float,
    margin: float,
) -> float:
    """
    Compute the largest uniform scale fitting the source inside the margin box.

    Args:
        source_width: Source width in points
        source_height: Source height in points
        page_width: Page width in points
        page_height: Page height in points
        margin: Requested margin in points (clamped, see effective_margin)

    Returns:
        Scale factor (> 0)

    Example:
        >>> fit_scale(150, 75, 612, 792, 36)
        3.6
    """
    safe_margin = effective_margin(page_width, page_height, margin)
    available_width = max(page_width - safe_margin * 2.0, MIN_AVAILABLE_PT)
    available_height = max(page_height - safe_margin * 2.0, MIN_AVAILABLE_PT)
    width_scale = available_width / max(source_width, FIT_EPSILON)
    height_scale = available_height / max(source_height, FIT_EPSILON)
    return min(width_scale, height_scale)


def select_layout(
    source_width: float,
    source_height: float,
    candidates: Sequence[PageCandidate],
    margin: float,
) -> LayoutResult:
    """
    Pick the candidate page giving the largest scale.

    Every candidate is evaluated with fit_scale; on an exact tie the
    earlier candidate is kept.

    Args:
        source_width: Source width in points
        source_height: Source height in points
        candidates: Page sizes in preference order
        margin: Requested margin in points

    Returns:
        LayoutResult for the winning candidate

    Raises:
        ValueError: If candidates is empty
    """
    if not candidates:
        raise ValueError("At least one page candidate is required")

    best: LayoutResult | None = None
    for candidate in candidates:
        scale = fit_scale(source_width, source_height, candidate.width, candidate.height, margin)
        if best is None or scale > best.scale:
            best = LayoutResult(page_width=candidate.width, page_height=candidate.height, scale=scale)
    return best


def select_best_layout(
    source_width: float,
    source_height: float,
    base_page_width: float,
    base_page_height: float,
    margin: float,
) -> LayoutResult:
    """
    Choose portrait or landscape for a baseline page.

    Args:
        source_width: Source width in points
        source_height: Source height in points
        base_page_width: Baseline page width (portrait orientation as given)
        base_page_height: Baseline page height
        margin: Requested margin in points

    Returns:
        LayoutResult whose page dimensions match the winning orientation;
        ties keep the page as given.

    Example:
        >>> select_best_layout(150, 75, 612, 792, 36)
        LayoutResult(page_width=792, page_height=612, scale=4.8)
    """
    base = PageCandidate(width=base_page_width, height=base_page_height)
    result = select_layout(source_width, source_height, (base, base.swapped()), margin)
    logger.debug(
        f"Layout for {source_width:.2f}x{source_height:.2f}pt: "
        f"{'landscape' if result.page_width != base_page_width else 'as given'} "
        f"{result.page_width:.2f}x{result.page_height:.2f}pt at scale {result.scale:.4f}"
    )
    return result


def place_content(source_width: float, source_height: float, layout: LayoutResult) -> Placement:
    """
    Size the drawing and centre it on the full page.

    The margin only bounds the scale; the offsets centre the drawing in
    the whole page, not in the margin box.
    """
    draw_width = source_width * layout.scale
    draw_height = source_height * layout.scale
    return Placement(
        draw_width=draw_width,
        draw_height=draw_height,
        offset_x=(layout.page_width - draw_width) * 0.5,
        offset_y=(layout.page_height - draw_height) * 0.5,
    )
