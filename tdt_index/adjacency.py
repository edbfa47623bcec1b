"""
Adjacency index: for every vertex (token label), which other labels co-occur
with it in which document.

Built incrementally, one document's local neighbor map at a time. Neighbor sets
only grow: merging a document twice, or extending it later, unions the sets.
"""

import threading
from typing import Iterable, Iterator, Mapping

from .errors import InvalidArgument


def union_neighbor_maps(
    existing: Mapping[int, Iterable[str]],
    incoming: Mapping[int, Iterable[str]],
) -> dict[int, frozenset[str]]:
    """
    Return a new doc_id -> neighbor-set map holding the union of both inputs.
    Neither input is modified and the result shares no mutable state with them.
    A bare string is rejected; it would otherwise be split into characters.
    """
    for doc_id, neighbors in incoming.items():
        if isinstance(neighbors, str):
            raise InvalidArgument(
                f"Neighbors of doc {doc_id} must be a collection of labels, not {neighbors!r}"
            )
    merged: dict[int, frozenset[str]] = {
        doc_id: frozenset(neighbors) for doc_id, neighbors in existing.items()
    }
    for doc_id, neighbors in incoming.items():
        merged[doc_id] = merged.get(doc_id, frozenset()) | frozenset(neighbors)
    return merged


class AdjacencyIndex:
    """
    Map from vertex label -> {doc_id: frozenset of neighbor labels}.

    Stored sets are frozensets and a vertex entry is replaced as a whole on
    every write, so a reader never sees a half-merged entry.
    """

    def __init__(self) -> None:
        self._vertices: dict[str, dict[int, frozenset[str]]] = {}
        self._lock = threading.Lock()

    def add_neighbor(self, vertex_label: str, document_id: int, neighbor_label: str) -> None:
        """Record neighbor_label next to vertex_label in document_id (idempotent)."""
        self.merge_document_neighbors(vertex_label, {document_id: (neighbor_label,)})

    def merge_document_neighbors(
        self,
        vertex_label: str,
        neighbor_map: Mapping[int, Iterable[str]],
    ) -> None:
        """
        Merge a local doc_id -> neighbors map into this vertex.
        Documents already present are unioned at the set level, never replaced.
        """
        with self._lock:
            current = self._vertices.get(vertex_label, {})
            self._vertices[vertex_label] = union_neighbor_maps(current, neighbor_map)

    def neighbors_of(self, vertex_label: str, document_id: int) -> frozenset[str] | None:
        """Neighbors of the vertex in this document, or None if none recorded."""
        entry = self._vertices.get(vertex_label)
        if entry is None:
            return None
        return entry.get(document_id)

    def all_documents(self, vertex_label: str) -> dict[int, frozenset[str]] | None:
        """Full doc_id -> neighbors map for the vertex, or None for an unknown vertex."""
        entry = self._vertices.get(vertex_label)
        if entry is None:
            return None
        return dict(entry)

    def documents_of(self, vertex_label: str) -> list[int]:
        """Sorted doc ids in which the vertex has neighbors (empty if unknown)."""
        return sorted(self._vertices.get(vertex_label, {}))

    def shared_documents(self, vertex_label: str, other_label: str) -> list[int]:
        """Sorted doc ids in which both vertices occur."""
        with self._lock:
            docs = set(self._vertices.get(vertex_label, {}))
            docs.intersection_update(self._vertices.get(other_label, {}))
        return sorted(docs)

    def vertices(self) -> Iterator[str]:
        with self._lock:
            return iter(list(self._vertices))

    def __len__(self) -> int:
        return len(self._vertices)

    def __contains__(self, vertex_label: str) -> bool:
        return vertex_label in self._vertices

    def to_dict(self) -> dict[str, dict[int, list[str]]]:
        """JSON-friendly copy: neighbor sets as sorted lists."""
        with self._lock:
            entries = list(self._vertices.items())
        return {
            label: {doc_id: sorted(neighbors) for doc_id, neighbors in docs.items()}
            for label, docs in entries
        }
