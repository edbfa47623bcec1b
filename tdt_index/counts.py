"""
Count index: corpus-wide token counts per document.

Layout is token_id -> {doc_id: count}. Each document's local count map is
merged as a per-document upsert into the inner maps, so counts recorded for
other documents under the same token id are kept.
"""

import threading
from typing import Iterator, Mapping

from .errors import InvalidArgument, NotFound


def _check_counts(document_id: int, token_counts: Mapping[int, int]) -> dict[int, int]:
    checked: dict[int, int] = {}
    for token_id, count in token_counts.items():
        if isinstance(count, bool) or not isinstance(count, int):
            raise InvalidArgument(
                f"Count for token {token_id} in doc {document_id} must be an integer: {count!r}"
            )
        if count < 0:
            raise InvalidArgument(
                f"Count for token {token_id} in doc {document_id} is negative: {count}"
            )
        checked[token_id] = count
    return checked


class CountIndex:
    """Map from token id -> {doc_id: occurrence count}."""

    def __init__(self) -> None:
        self._counts: dict[int, dict[int, int]] = {}
        self._lock = threading.Lock()

    def merge_document_counts(self, document_id: int, token_counts: Mapping[int, int]) -> None:
        """
        Upsert inner[document_id] = count for every (token_id, count) pair.
        The whole map is validated first; a bad count leaves the index untouched.
        """
        checked = _check_counts(document_id, token_counts)
        with self._lock:
            for token_id, count in checked.items():
                inner = dict(self._counts.get(token_id, {}))
                inner[document_id] = count
                self._counts[token_id] = inner

    def count_of(self, document_id: int, token_id: int) -> int:
        """Count of token_id in document_id; NotFound if never recorded."""
        try:
            return self._counts[token_id][document_id]
        except KeyError:
            raise NotFound(f"Token {token_id} not recorded for doc {document_id}") from None

    def documents_for(self, token_id: int) -> dict[int, int]:
        """doc_id -> count for one token (empty if unknown)."""
        return dict(self._counts.get(token_id, {}))

    def full_index(self) -> dict[int, dict[int, int]]:
        """Copy of the whole token -> (doc -> count) structure, for persistence."""
        with self._lock:
            return {token_id: dict(docs) for token_id, docs in self._counts.items()}

    def token_ids(self) -> Iterator[int]:
        with self._lock:
            return iter(list(self._counts))

    def __len__(self) -> int:
        return len(self._counts)

    def __contains__(self, token_id: int) -> bool:
        return token_id in self._counts
