"""
Module: errors

Purpose:
    Exception taxonomy for conversions. Every failure surfaces as a
    ConversionError subclass; collaborator exceptions are chained with
    ``raise ... from e`` so the original cause stays inspectable.

Key Classes:
    - ConversionError: Base class
    - SourceParseError: Input is not a well-formed SVG scene
    - InvalidGeometryError: Source has a non-positive size
    - AllocationError: Pixel buffer could not be allocated
    - InternalInvariantError: Assembler could not resolve the merged root

Used By:
    - converter: Public operations
    - scene.parser, raster.export, assembly.document
"""

from __future__ import annotations


class ConversionError(Exception):
    """Error during a page or raster conversion."""
    pass


class SourceParseError(ConversionError):
    """Source text is not a well-formed SVG scene."""
    pass


class InvalidGeometryError(ConversionError):
    """Source length is not strictly positive on an axis."""
    pass


class AllocationError(ConversionError):
    """Pixel buffer could not be allocated at the computed size."""
    pass


class InternalInvariantError(ConversionError):
    """Assembler invariant violated (indicates a defect, not bad input)."""
    pass
