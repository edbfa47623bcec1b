"""
Text graph tests
================

Local text graphs built from token occurrences, and their aggregation into
the corpus-wide indexes.
"""

import pytest

from tdt_index.config import INITIAL_INFO_VALUE
from tdt_index.errors import InvalidArgument, NotFound
from tdt_index.occurrence import TokenOccurrence
from tdt_index.text_graph import GraphAggregator, LabelTable, TextGraph, build_text_graph


def occurrences(words, key="20060512CNN"):
    return [TokenOccurrence(w, i, key) for i, w in enumerate(words, start=1)]


class TestTokenOccurrence:

    def test_is_immutable(self):
        occ = TokenOccurrence("storm", 3, "20060512CNN")
        with pytest.raises(AttributeError):
            occ.position = 4

    def test_same_label_different_position_are_distinct(self):
        assert TokenOccurrence("storm", 1, "k") != TokenOccurrence("storm", 2, "k")

    def test_negative_position_rejected(self):
        with pytest.raises(InvalidArgument):
            TokenOccurrence("storm", -1, "k")

    def test_empty_label_rejected(self):
        with pytest.raises(InvalidArgument):
            TokenOccurrence("", 0, "k")


class TestLabelTable:

    def test_ids_assigned_in_order_of_first_use(self):
        labels = LabelTable()
        assert labels.id_for("storm") == 0
        assert labels.id_for("coast") == 1
        assert labels.id_for("storm") == 0
        assert labels.label_for(1) == "coast"

    def test_unknown(self):
        labels = LabelTable()
        with pytest.raises(NotFound):
            labels.lookup("storm")
        with pytest.raises(NotFound):
            labels.label_for(0)


class TestBuildTextGraph:

    def test_counts_and_neighbors(self):
        labels = LabelTable()
        graph = build_text_graph(5, occurrences(["storm", "hit", "coast", "storm"]), labels)
        storm, hit, coast = labels.lookup("storm"), labels.lookup("hit"), labels.lookup("coast")
        assert graph.token_counts == {storm: 2, hit: 1, coast: 1}
        assert graph.neighbors["storm"] == {"hit", "coast"}
        assert graph.neighbors["hit"] == {"storm", "coast"}
        assert graph.info_values["coast"] == {"20060512CNN": INITIAL_INFO_VALUE}
        assert graph.collection_key == "20060512CNN"

    def test_occurrences_ordered_by_position(self):
        labels = LabelTable()
        shuffled = [
            TokenOccurrence("c", 3, "k"),
            TokenOccurrence("a", 1, "k"),
            TokenOccurrence("b", 2, "k"),
        ]
        graph = build_text_graph(1, shuffled, labels)
        assert graph.neighbors["a"] == {"b"}
        assert graph.arcs == {"0*1": 1, "1*2": 1}

    def test_repeated_token_is_not_its_own_neighbor(self):
        graph = build_text_graph(1, occurrences(["very", "very", "big"]), LabelTable())
        assert graph.neighbors["very"] == {"big"}

    def test_mixed_collections_rejected(self):
        mixed = [TokenOccurrence("a", 1, "k1"), TokenOccurrence("b", 2, "k2")]
        with pytest.raises(InvalidArgument):
            build_text_graph(1, mixed, LabelTable())

    def test_round_trip_dict(self):
        graph = build_text_graph(3, occurrences(["storm", "coast"]), LabelTable())
        assert TextGraph.from_dict(graph.to_dict()) == graph


class TestGraphAggregator:

    def test_merges_documents_into_indexes(self):
        agg = GraphAggregator()
        agg.add_text_graph(agg.build(1, occurrences(["storm", "hit", "coast"])))
        agg.add_text_graph(agg.build(2, occurrences(["storm", "storm", "rain"], "20060513BBC")))

        assert agg.count_of_label(1, "storm") == 1
        assert agg.count_of_label(2, "storm") == 2
        assert agg.adjacency.all_documents("storm") == {1: {"hit"}, 2: {"rain"}}
        assert agg.scores.collections_of("storm") == {"20060512CNN", "20060513BBC"}
        assert agg.scores.value_of("rain", "20060513BBC") == INITIAL_INFO_VALUE
        assert agg.doc_count == 2

    def test_empty_graph_is_skipped(self):
        agg = GraphAggregator()
        agg.add_text_graph(agg.build(1, []))
        assert agg.doc_count == 0
        assert len(agg.counts) == 0
