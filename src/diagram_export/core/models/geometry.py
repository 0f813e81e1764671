"""
Module: core.models.geometry

Purpose:
    Immutable page geometry models: the candidate page a caller offers,
    the layout chosen for it, and where the scaled content lands.

Key Classes:
    - PageCandidate: Baseline page size usable in either orientation
    - LayoutResult: Chosen page size and uniform scale
    - Placement: Drawn size and centring offset of the content

Dependencies:
    - reportlab.lib.pagesizes: Named page size presets
    - dataclasses (std)

Used By:
    - layout.fit: Produces LayoutResult and Placement
    - assembly.document: Consumes both to build the page
"""

from __future__ import annotations

from dataclasses import dataclass

from reportlab.lib import pagesizes


@dataclass(frozen=True, slots=True)
class PageCandidate:
    """
    Baseline page size in points.

    A candidate is usable as given or swapped; the layout engine decides
    which orientation fits the content best.

    Attributes:
        width: Page width in points
        height: Page height in points

    Example:
        >>> PageCandidate(612, 792).swapped()
        PageCandidate(width=792, height=612)
    """

    width: float
    height: float

    def swapped(self) -> PageCandidate:
        """Same page with width and height exchanged."""
        return PageCandidate(width=self.height, height=self.width)

    @classmethod
    def from_preset(cls, name: str) -> PageCandidate:
        """
        Build a candidate from a named reportlab page size.

        Args:
            name: Case-insensitive preset name such as "letter" or "a4"

        Returns:
            Portrait PageCandidate

        Raises:
            ValueError: If the preset is unknown
        """
        size = getattr(pagesizes, name.strip().upper(), None)
        if size is None:
            size = getattr(pagesizes, name.strip().lower(), None)
        if not isinstance(size, tuple) or len(size) != 2:
            raise ValueError(f"Unknown page size preset: {name!r}")
        width, height = pagesizes.portrait(size)
        return cls(width=float(width), height=float(height))


@dataclass(frozen=True, slots=True)
class LayoutResult:
    """
    Page size and uniform scale selected for a source.

    Attributes:
        page_width: Page width in points (winning orientation)
        page_height: Page height in points (winning orientation)
        scale: Uniform factor applied to the source length

    Invariants:
        - scale > 0
        - source_width * scale <= page_width - 2 * effective_margin
        - source_height * scale <= page_height - 2 * effective_margin
    """

    page_width: float
    page_height: float
    scale: float

    @property
    def is_landscape(self) -> bool:
        """True when the page is wider than tall."""
        return self.page_width > self.page_height


@dataclass(frozen=True, slots=True)
class Placement:
    """
    Drawn size and lower-left offset of the content on the page.

    Offsets centre the drawing in the full page, not the margin box.

    Attributes:
        draw_width: Drawn content width in points
        draw_height: Drawn content height in points
        offset_x: Distance from the page's left edge
        offset_y: Distance from the page's bottom edge
    """

    draw_width: float
    draw_height: float
    offset_x: float
    offset_y: float

    def as_matrix(self) -> tuple[float, float, float, float, float, float]:
        """Affine matrix mapping the unit square onto the drawn area."""
        return (self.draw_width, 0.0, 0.0, self.draw_height, self.offset_x, self.offset_y)
