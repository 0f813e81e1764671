"""
Module: assembly.ids

Purpose:
    Monotonic object identifier allocation for one container document.
"""

from __future__ import annotations

from pypdf.generic import IndirectObject


class IdAllocator:
    """
    Issues PDF object identifiers starting at 1.

    One allocator serves a single conversion; identifiers are never reused.

    Example:
        >>> alloc = IdAllocator()
        >>> alloc.bump(), alloc.bump()
        (1, 2)
    """

    def __init__(self, start: int = 1) -> None:
        if start < 1:
            raise ValueError(f"start must be positive: {start}")
        self._next = start

    def bump(self) -> int:
        """Return the next identifier and advance the counter."""
        issued = self._next
        self._next += 1
        return issued

    @property
    def last(self) -> int:
        """Highest identifier issued, 0 if none."""
        return self._next - 1


def ref(obj_id: int) -> IndirectObject:
    """Reference to an object of the container document (generation 0)."""
    return IndirectObject(obj_id, 0, None)
