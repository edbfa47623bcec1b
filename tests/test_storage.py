import json

import pytest

from tdt_index.adjacency import AdjacencyIndex
from tdt_index.counts import CountIndex
from tdt_index.errors import NotFound
from tdt_index.scores import ScoreIndex
from tdt_index.storage import (
    DiskCountReader,
    lexicon_path_for,
    read_adjacency,
    read_count_index,
    read_facet_doc_map,
    read_scores,
    write_adjacency,
    write_count_index,
    write_facet_doc_map,
    write_scores,
)


@pytest.fixture
def counts():
    index = CountIndex()
    index.merge_document_counts(1, {10: 2, 11: 1})
    index.merge_document_counts(2, {10: 5})
    return index


class TestCountIndexFiles:

    def test_jsonl_layout_and_lexicon(self, counts, tmp_path):
        path = tmp_path / "token_counts.jsonl"
        assert write_count_index(counts, path) == 2
        lines = path.read_text(encoding="utf-8").splitlines()
        assert json.loads(lines[0]) == {"token_id": 10, "counts": [[1, 2], [2, 5]]}
        lexicon = json.loads(lexicon_path_for(path).read_text(encoding="utf-8"))
        assert lexicon["10"] == 0
        assert lexicon["11"] == len(lines[0]) + 1

    def test_disk_reader_seeks_one_token(self, counts, tmp_path):
        path = tmp_path / "token_counts.jsonl"
        write_count_index(counts, path)
        with DiskCountReader(path) as reader:
            assert reader.counts_for(10) == {1: 2, 2: 5}
            assert reader.counts_for(99) == {}
            assert reader.count_of(1, 11) == 1
            with pytest.raises(NotFound):
                reader.count_of(2, 11)

    def test_reader_requires_files(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            DiskCountReader(tmp_path / "missing.jsonl")

    def test_read_back(self, counts, tmp_path):
        path = tmp_path / "token_counts.jsonl"
        write_count_index(counts, path)
        assert read_count_index(path).full_index() == counts.full_index()


class TestJsonFiles:

    def test_adjacency_keys_restored_as_ints(self, tmp_path):
        index = AdjacencyIndex()
        index.merge_document_neighbors("storm", {3: {"coast", "wind"}})
        write_adjacency(index, tmp_path / "adjacency.json")
        loaded = read_adjacency(tmp_path / "adjacency.json")
        assert loaded.neighbors_of("storm", 3) == {"coast", "wind"}

    def test_scores(self, tmp_path):
        index = ScoreIndex()
        index.set_value("storm", "20060512CNN", 0.25)
        write_scores(index, tmp_path / "scores.json")
        assert read_scores(tmp_path / "scores.json").value_of("storm", "20060512CNN") == 0.25

    def test_facet_doc_map_sorted_distinct_and_ordered(self, tmp_path):
        facets = {"high": {"storm": [5, 2, 5]}, "low": {"rain": [9]}}
        write_facet_doc_map(facets, tmp_path / "facets.json")
        loaded = read_facet_doc_map(tmp_path / "facets.json")
        assert list(loaded) == ["high", "low"]
        assert loaded["high"]["storm"] == [2, 5]

    def test_facet_doc_map_read_drops_duplicate_ids(self, tmp_path):
        (tmp_path / "facets.json").write_text(json.dumps({"high": {"storm": [3, 1, 3]}}))
        assert read_facet_doc_map(tmp_path / "facets.json") == {"high": {"storm": [1, 3]}}
