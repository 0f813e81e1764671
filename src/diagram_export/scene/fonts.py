"""
Module: scene.fonts

Purpose:
    Host font enumeration and preferred-family resolution. Font files in
    the platform font directories are inspected with Pillow's FreeType
    binding; the family of every face is collected.

Key Functions:
    - list_fonts(): Sorted unique family names installed on the host
    - resolve_preferred_font_family(): Pick a family from a CSS font stack
    - parse_font_family_stack(): Split a CSS font stack into family names
    - system_font_dirs(): Platform font directories

Dependencies:
    - PIL.ImageFont: Font face inspection

Used By:
    - converter.list_fonts()
"""

from __future__ import annotations

import logging
import os
import sys
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence

from PIL import ImageFont

logger = logging.getLogger(__name__)

FONT_SUFFIXES = frozenset({".ttf", ".otf", ".ttc", ".otc"})
COLLECTION_SUFFIXES = frozenset({".ttc", ".otc"})
GENERIC_FAMILIES = frozenset({"sans-serif", "serif", "monospace", "system-ui"})
FALLBACK_FAMILY = "Helvetica"

# Upper bound on faces read from one collection file
MAX_COLLECTION_FACES = 64


def system_font_dirs() -> List[Path]:
    """
    Font directories searched on the current platform.

    Returns:
        Existing and non-existing candidate directories, in search order
    """
    home = Path.home()
    if sys.platform == "darwin":
        return [
            Path("/System/Library/Fonts"),
            Path("/Library/Fonts"),
            home / "Library" / "Fonts",
        ]
    if sys.platform.startswith("win"):
        windir = Path(os.environ.get("WINDIR", r"C:\Windows"))
        dirs = [windir / "Fonts"]
        local = os.environ.get("LOCALAPPDATA")
        if local:
            dirs.append(Path(local) / "Microsoft" / "Windows" / "Fonts")
        return dirs
    data_home = Path(os.environ.get("XDG_DATA_HOME", home / ".local" / "share"))
    return [
        Path("/usr/share/fonts"),
        Path("/usr/local/share/fonts"),
        data_home / "fonts",
        home / ".fonts",
    ]


def list_fonts(search_dirs: Optional[Iterable[Path]] = None) -> List[str]:
    """
    List installed font families.

    Args:
        search_dirs: Directories to scan recursively; defaults to the
            platform font directories (result cached per process)

    Returns:
        Alphabetically sorted, de-duplicated family names

    Example:
        >>> list_fonts()[:3]
        ['DejaVu Sans', 'DejaVu Sans Mono', 'DejaVu Serif']
    """
    if search_dirs is None:
        return list(_system_families())
    return sorted(_collect_families(Path(d) for d in search_dirs))


@lru_cache(maxsize=1)
def _system_families() -> tuple[str, ...]:
    families = tuple(sorted(_collect_families(system_font_dirs())))
    logger.info(f"Found {len(families)} font families on host")
    return families


def _collect_families(directories: Iterable[Path]) -> set[str]:
    families: set[str] = set()
    for path in _iter_font_files(directories):
        families.update(_read_families(path))
    return families


def _iter_font_files(directories: Iterable[Path]) -> Iterator[Path]:
    for directory in directories:
        if not directory.is_dir():
            continue
        for path in sorted(directory.rglob("*")):
            if path.suffix.lower() in FONT_SUFFIXES and path.is_file():
                yield path


def _read_families(path: Path) -> List[str]:
    """Family names of every face in a font file; unreadable files yield none."""
    face_count = MAX_COLLECTION_FACES if path.suffix.lower() in COLLECTION_SUFFIXES else 1
    families: List[str] = []
    for index in range(face_count):
        try:
            font = ImageFont.truetype(str(path), size=12, index=index)
        except OSError as e:
            if index == 0:
                logger.debug(f"Skipping unreadable font {path}: {e}")
            break
        family, _style = font.getname()
        if family:
            families.append(family)
    return families


def parse_font_family_stack(font_stack: str) -> List[str]:
    """
    Split a CSS font-family stack into concrete family names.

    Quotes are stripped and generic families are dropped.

    Example:
        >>> parse_font_family_stack("'JetBrains Mono', Menlo, monospace")
        ['JetBrains Mono', 'Menlo']
    """
    names = []
    for part in str(font_stack or "").split(","):
        name = part.strip().strip("'\"").strip()
        if name and name.lower() not in GENERIC_FAMILIES:
            names.append(name)
    return names


def resolve_preferred_font_family(
    font_stack: str,
    installed: Optional[Sequence[str]] = None,
) -> str:
    """
    Choose the family to request for a CSS font stack.

    Args:
        font_stack: CSS font-family value
        installed: Installed families (defaults to list_fonts())

    Returns:
        First declared family that is installed (in its installed
        spelling), else the first declared family, else "Helvetica"
    """
    candidates = parse_font_family_stack(font_stack)
    if not candidates:
        return FALLBACK_FAMILY

    if installed is None:
        installed = list_fonts()
    by_lower = {name.lower(): name for name in installed if name}
    for family in candidates:
        hit = by_lower.get(family.lower())
        if hit:
            return hit
    return candidates[0]
