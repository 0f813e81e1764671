"""
Unit tests for the ObjectSubgraph model and reference traversal.
"""

from pypdf.generic import ArrayObject, DictionaryObject, IndirectObject, NameObject, NumberObject

from diagram_export.core.models import ObjectSubgraph, iter_references


class TestIterReferences:
    """Tests for iter_references()."""

    def test_iter_references_when_nested_then_yields_all(self):
        body = DictionaryObject(
            {
                NameObject("/A"): IndirectObject(1, 0, None),
                NameObject("/B"): ArrayObject(
                    [NumberObject(3), DictionaryObject({NameObject("/C"): IndirectObject(2, 0, None)})]
                ),
            }
        )
        assert sorted(r.idnum for r in iter_references(body)) == [1, 2]

    def test_iter_references_when_primitive_then_yields_nothing(self):
        assert list(iter_references(NumberObject(7))) == []

    def test_iter_references_when_stream_then_walks_dictionary(self, sample_subgraph):
        form = sample_subgraph.objects[10]
        assert [r.idnum for r in iter_references(form)] == [11]


class TestObjectSubgraph:
    """Tests for ObjectSubgraph."""

    def test_ids_when_called_then_emission_order(self, sample_subgraph):
        assert sample_subgraph.ids() == [10, 11, 12]

    def test_edges_when_cycle_then_all_edges_listed(self, sample_subgraph):
        assert sample_subgraph.edges() == {(10, 11), (11, 12), (12, 11)}

    def test_distinct_ids_when_dangling_reference_then_included(self):
        graph = ObjectSubgraph(
            objects={1: DictionaryObject({NameObject("/X"): IndirectObject(9, 0, None)})},
            root=1,
        )
        assert graph.distinct_ids() == {1, 9}
