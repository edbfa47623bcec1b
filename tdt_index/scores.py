"""
Score index: the informational value of every vertex, per collection.

A collection groups documents sharing source and date. Values are
last-write-wins; there is no accumulation.
"""

import threading
from numbers import Real
from typing import Iterator, Mapping

from .errors import InvalidArgument, NotFound


def _check_value(vertex_label: str, collection_key: str, value) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidArgument(
            f"Info value for {vertex_label!r} in {collection_key!r} must be numeric: {value!r}"
        )
    return float(value)


class ScoreIndex:
    """Map from vertex label -> {collection_key: float}."""

    def __init__(self) -> None:
        self._values: dict[str, dict[str, float]] = {}
        self._lock = threading.Lock()

    def set_value(self, vertex_label: str, collection_key: str, value: float) -> None:
        """Store value for the vertex in this collection, replacing any earlier value."""
        self.merge_values(vertex_label, {collection_key: value})

    def merge_values(self, vertex_label: str, values: Mapping[str, float]) -> None:
        """Bulk upsert; for keys present on both sides the incoming value wins."""
        checked = {key: _check_value(vertex_label, key, v) for key, v in values.items()}
        with self._lock:
            merged = dict(self._values.get(vertex_label, {}))
            merged.update(checked)
            self._values[vertex_label] = merged

    def value_of(self, vertex_label: str, collection_key: str) -> float:
        """
        Recorded value of the vertex in this collection.
        Raises NotFound when nothing was recorded; 0.0 is a real value, not a default.
        """
        try:
            return self._values[vertex_label][collection_key]
        except KeyError:
            raise NotFound(
                f"No info value for {vertex_label!r} in collection {collection_key!r}"
            ) from None

    def collections_of(self, vertex_label: str) -> frozenset[str]:
        return frozenset(self._values.get(vertex_label, {}))

    def shared_collections(self, vertex_label: str, other_label: str) -> frozenset[str]:
        """Collections in which both vertices have a value."""
        return self.collections_of(vertex_label) & self.collections_of(other_label)

    def vertices(self) -> Iterator[str]:
        with self._lock:
            return iter(list(self._values))

    def __len__(self) -> int:
        return len(self._values)

    def to_dict(self) -> dict[str, dict[str, float]]:
        with self._lock:
            return {label: dict(values) for label, values in self._values.items()}
