"""
Module: assembly.merge

Purpose:
    Relabel an externally produced object subgraph into the container
    document's identifier space. The old-to-new mapping is populated
    lazily from the shared allocator while every reference-typed field is
    rewritten, which guarantees:

    - totality: every identifier seen (object or reference) is mapped once
    - injectivity: new identifiers never collide with each other or with
      identifiers issued before the merge
    - structural equivalence: each edge old_a -> old_b becomes
      new(old_a) -> new(old_b)

Key Functions:
    - renumber(): Rewrite a subgraph under fresh identifiers

Key Classes:
    - MergeResult: Rewritten objects plus the identifier mapping

Dependencies:
    - pypdf.generic: PDF object model
    - assembly.ids: IdAllocator

Used By:
    - assembly.document.assemble_document()
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import Callable, Dict

from pypdf.generic import (
    ArrayObject,
    DictionaryObject,
    IndirectObject,
    NullObject,
    PdfObject,
    StreamObject,
)

from diagram_export.core.models import ObjectSubgraph

from .ids import IdAllocator, ref

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MergeResult:
    """
    Outcome of a subgraph renumbering (immutable).

    Attributes:
        objects: New identifier -> rewritten body, in allocation order
        id_map: Old identifier -> new identifier
        dangling: New identifiers that were referenced but had no body
    """

    objects: Dict[int, PdfObject]
    id_map: Dict[int, int]
    dangling: tuple[int, ...] = ()

    def resolve(self, old_id: int) -> int | None:
        """New identifier for an old one, or None if it was never seen."""
        return self.id_map.get(old_id)


def renumber(subgraph: ObjectSubgraph, allocator: IdAllocator) -> MergeResult:
    """
    Rewrite every object of a subgraph under fresh identifiers.

    Objects are visited in the subgraph's order; for each one its own
    identifier is mapped first, then every reference in its body. The
    input subgraph is left untouched.

    Identifiers referenced but absent from the subgraph are still mapped
    and filled with null objects so the output stays dense.

    Args:
        subgraph: Renderer output with its own identifier space
        allocator: Shared allocator of the container document

    Returns:
        MergeResult with rewritten objects and the mapping

    Example:
        >>> alloc = IdAllocator(); [alloc.bump() for _ in range(5)]
        >>> result = renumber(graph, alloc)   # graph ids {1, 2}
        >>> result.id_map
        {1: 6, 2: 7}
    """
    id_map: Dict[int, int] = {}

    def lookup(old_id: int) -> int:
        if old_id not in id_map:
            id_map[old_id] = allocator.bump()
        return id_map[old_id]

    rewritten: Dict[int, PdfObject] = {}
    for old_id, body in subgraph.objects.items():
        new_id = lookup(old_id)
        rewritten[new_id] = _rewrite(body, lookup)

    dangling = tuple(new_id for new_id in id_map.values() if new_id not in rewritten)
    for new_id in dangling:
        rewritten[new_id] = NullObject()
    if dangling:
        logger.warning(f"Subgraph referenced {len(dangling)} missing objects, emitted as null")

    objects = {new_id: rewritten[new_id] for new_id in sorted(rewritten)}
    logger.debug(f"Renumbered {len(id_map)} subgraph identifiers")
    return MergeResult(objects=objects, id_map=id_map, dangling=dangling)


def _rewrite(value: PdfObject, lookup: Callable[[int], int]) -> PdfObject:
    """
    Copy a body with every IndirectObject replaced by its new reference.

    Containers are rebuilt rather than mutated, so the same direct object
    reached twice is never relabelled twice.
    """
    if isinstance(value, IndirectObject):
        return ref(lookup(value.idnum))
    if isinstance(value, StreamObject):
        # Shallow copy keeps the encoded payload and the stream subclass
        stream = copy.copy(value)
        for key, item in value.items():
            stream[key] = _rewrite(item, lookup)
        return stream
    if isinstance(value, DictionaryObject):
        result = DictionaryObject()
        for key, item in value.items():
            result[key] = _rewrite(item, lookup)
        return result
    if isinstance(value, ArrayObject):
        return ArrayObject(_rewrite(item, lookup) for item in value)
    return value
