"""
Per-document text graphs and their aggregation into the corpus-wide indexes.

A text graph is built from one document's token occurrences:
- token_counts: token_id -> occurrences in this document
- neighbors: label -> labels immediately left/right of it in this document
- info_values: label -> {collection_key: placeholder info value}
- arcs: "left_id*right_id" -> times the left token directly precedes the right one

GraphAggregator folds text graphs, one document at a time, into the
AdjacencyIndex, ScoreIndex and CountIndex keyed by document id.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable

from .adjacency import AdjacencyIndex
from .config import INITIAL_INFO_VALUE
from .counts import CountIndex
from .errors import InvalidArgument, NotFound
from .occurrence import TokenOccurrence
from .scores import ScoreIndex

logger = logging.getLogger(__name__)


class LabelTable:
    """Token label <-> corpus-wide token id. Ids are handed out in order of first use."""

    def __init__(self) -> None:
        self._ids: dict[str, int] = {}
        self._labels: list[str] = []

    def id_for(self, label: str) -> int:
        """Id of label, assigning a new one on first use."""
        token_id = self._ids.get(label)
        if token_id is None:
            token_id = len(self._labels)
            self._ids[label] = token_id
            self._labels.append(label)
        return token_id

    def lookup(self, label: str) -> int:
        try:
            return self._ids[label]
        except KeyError:
            raise NotFound(f"Unknown label: {label!r}") from None

    def label_for(self, token_id: int) -> str:
        if 0 <= token_id < len(self._labels):
            return self._labels[token_id]
        raise NotFound(f"Unknown token id: {token_id}")

    def __len__(self) -> int:
        return len(self._labels)

    def __contains__(self, label: str) -> bool:
        return label in self._ids

    def to_list(self) -> list[str]:
        return list(self._labels)

    @classmethod
    def from_list(cls, labels: Iterable[str]) -> "LabelTable":
        table = cls()
        for label in labels:
            table.id_for(label)
        return table


def arc_key(left_id: int, right_id: int) -> str:
    return f"{left_id}*{right_id}"


@dataclass
class TextGraph:
    doc_id: int
    collection_key: str
    token_counts: dict[int, int] = field(default_factory=dict)
    neighbors: dict[str, set[str]] = field(default_factory=dict)
    info_values: dict[str, dict[str, float]] = field(default_factory=dict)
    arcs: dict[str, int] = field(default_factory=dict)

    def is_empty(self) -> bool:
        return not self.token_counts

    def neighbor_map(self, label: str) -> dict[int, set[str]]:
        """The doc_id -> neighbors map of one vertex, ready to merge."""
        return {self.doc_id: set(self.neighbors.get(label, ()))}

    def to_dict(self) -> dict:
        return {
            "doc_id": self.doc_id,
            "collection_key": self.collection_key,
            "token_counts": {str(k): v for k, v in self.token_counts.items()},
            "neighbors": {k: sorted(v) for k, v in self.neighbors.items()},
            "info_values": self.info_values,
            "arcs": self.arcs,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TextGraph":
        return cls(
            doc_id=int(data["doc_id"]),
            collection_key=data["collection_key"],
            token_counts={int(k): int(v) for k, v in data["token_counts"].items()},
            neighbors={k: set(v) for k, v in data["neighbors"].items()},
            info_values={k: dict(v) for k, v in data["info_values"].items()},
            arcs=dict(data.get("arcs", {})),
        )


def build_text_graph(
    doc_id: int,
    occurrences: Iterable[TokenOccurrence],
    labels: LabelTable,
    collection_key: str | None = None,
) -> TextGraph:
    """
    Build the local text graph of one document.

    Occurrences are ordered by position. Adjacent tokens become each other's
    neighbors; a token is never its own neighbor. All occurrences must share
    one collection key.
    """
    ordered = sorted(occurrences, key=lambda occ: occ.position)
    keys = {occ.collection_key for occ in ordered}
    if collection_key is not None:
        keys.add(collection_key)
    if len(keys) > 1:
        raise InvalidArgument(f"Doc {doc_id} mixes collection keys: {sorted(keys)}")
    key = keys.pop() if keys else (collection_key or "")

    graph = TextGraph(doc_id=doc_id, collection_key=key)
    counts: Counter[int] = Counter()
    arcs: Counter[str] = Counter()
    previous: TokenOccurrence | None = None
    for occ in ordered:
        token_id = labels.id_for(occ.label)
        counts[token_id] += 1
        graph.neighbors.setdefault(occ.label, set())
        graph.info_values.setdefault(occ.label, {key: INITIAL_INFO_VALUE})
        if previous is not None and previous.label != occ.label:
            graph.neighbors[previous.label].add(occ.label)
            graph.neighbors[occ.label].add(previous.label)
            arcs[arc_key(labels.id_for(previous.label), token_id)] += 1
        previous = occ

    graph.token_counts = dict(counts)
    graph.arcs = dict(arcs)
    return graph


class GraphAggregator:
    """The three corpus-wide indexes plus the label table that keys the counts."""

    def __init__(
        self,
        adjacency: AdjacencyIndex | None = None,
        scores: ScoreIndex | None = None,
        counts: CountIndex | None = None,
        labels: LabelTable | None = None,
    ) -> None:
        self.adjacency = adjacency if adjacency is not None else AdjacencyIndex()
        self.scores = scores if scores is not None else ScoreIndex()
        self.counts = counts if counts is not None else CountIndex()
        self.labels = labels if labels is not None else LabelTable()
        self.doc_count = 0

    def build(
        self,
        doc_id: int,
        occurrences: Iterable[TokenOccurrence],
        collection_key: str | None = None,
    ) -> TextGraph:
        """Build a document's text graph with this aggregator's label table."""
        return build_text_graph(doc_id, occurrences, self.labels, collection_key)

    def add_text_graph(self, graph: TextGraph) -> None:
        """Merge one document's local maps into the three indexes."""
        if graph.is_empty():
            logger.debug("Skipping empty text graph for doc %d", graph.doc_id)
            return
        for label in graph.neighbors:
            self.adjacency.merge_document_neighbors(label, graph.neighbor_map(label))
        for label, values in graph.info_values.items():
            self.scores.merge_values(label, values)
        self.counts.merge_document_counts(graph.doc_id, graph.token_counts)
        self.doc_count += 1

    def count_of_label(self, doc_id: int, label: str) -> int:
        return self.counts.count_of(doc_id, self.labels.lookup(label))
