"""
Module: core.models.subgraph

Purpose:
    Provides ObjectSubgraph - a self-contained set of PDF objects produced
    by a renderer, with its own identifier space and one distinguished root.
    The assembler merges it into a container document under fresh ids.

Key Classes:
    - ObjectSubgraph: Identified PDF object bodies plus a root id

Key Functions:
    - iter_references(): Yield every indirect reference inside a body

Dependencies:
    - pypdf.generic: PDF object model

Used By:
    - scene.subgraph: Produces subgraphs from rendered scenes
    - assembly.merge: Renumbers subgraphs
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator

from pypdf.generic import ArrayObject, DictionaryObject, IndirectObject, PdfObject


@dataclass
class ObjectSubgraph:
    """
    Externally produced PDF objects with internal references.

    Bodies refer to one another through ``IndirectObject`` values whose
    ``idnum`` is a key of ``objects`` (generation numbers are ignored).

    Attributes:
        objects: Mapping of identifier to object body, in emission order
        root: Identifier of the drawable the page should paint

    Example:
        >>> graph = ObjectSubgraph(objects={1: form, 2: font}, root=1)
        >>> graph.ids()
        [1, 2]
    """

    objects: Dict[int, PdfObject] = field(default_factory=dict)
    root: int = 0

    def ids(self) -> list[int]:
        """Object identifiers in emission order."""
        return list(self.objects)

    def edges(self) -> set[tuple[int, int]]:
        """Reference edges (from id, to id) between subgraph objects."""
        return {
            (obj_id, ref.idnum)
            for obj_id, body in self.objects.items()
            for ref in iter_references(body)
        }

    def distinct_ids(self) -> set[int]:
        """Every identifier that appears as an object or a reference target."""
        found = set(self.objects)
        for body in self.objects.values():
            found.update(ref.idnum for ref in iter_references(body))
        return found


def iter_references(value: PdfObject) -> Iterator[IndirectObject]:
    """
    Yield every IndirectObject nested inside a body without resolving it.

    Dictionaries (including stream dictionaries) and arrays are walked
    recursively; the references themselves are never dereferenced.
    """
    if isinstance(value, IndirectObject):
        yield value
    elif isinstance(value, DictionaryObject):
        for item in value.values():
            yield from iter_references(item)
    elif isinstance(value, ArrayObject):
        for item in value:
            yield from iter_references(item)
