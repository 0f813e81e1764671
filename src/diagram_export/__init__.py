"""Top-level package for diagram_export.

Converts SVG diagrams into a fitted single-page PDF or a PNG image.

Provides subpackages:
- diagram_export.options – options bag resolution
- diagram_export.layout – page fit and placement
- diagram_export.scene – SVG parsing, fonts, subgraph rendering
- diagram_export.assembly – PDF object-graph assembly
- diagram_export.raster – PNG export
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        try:
            content = pyproject.read_text()
            for line in content.splitlines():
                if line.strip().startswith("version"):
                    # Parse: version = "0.1.0"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass

    try:
        from importlib.metadata import version as pkg_version
        return pkg_version("diagram-export")
    except Exception:
        return "0.0.0"

__version__ = _get_version()

from .converter import to_page, to_raster, list_fonts  # noqa: E402
from .errors import (  # noqa: E402
    ConversionError,
    SourceParseError,
    InvalidGeometryError,
    AllocationError,
    InternalInvariantError,
)

__all__: list[str] = [
    "__version__",
    "to_page",
    "to_raster",
    "list_fonts",
    "ConversionError",
    "SourceParseError",
    "InvalidGeometryError",
    "AllocationError",
    "InternalInvariantError",
]
