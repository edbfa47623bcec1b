"""
Facet document resolver: turns candidate (doc_id, arc) pairs, selected upstream
by matching facets, into the ordered set of text-graph (*.tgr) file paths that
the pairwise document-similarity stage reads.

Facet-document map layout:
    {count_class: {facet_key: [doc_id, ...]}}   (doc ids ascending)
"""

import copy
import datetime
import logging
from typing import Mapping, Protocol, Sequence

from .config import GraphStoreContext
from .errors import IOFailure
from .scope import EPOCH_ANCHOR, SessionScope, text_graph_filename

logger = logging.getLogger(__name__)

FacetDocMap = Mapping[str, Mapping[str, Sequence[int]]]


class DocumentLookup(Protocol):
    def filename(self, doc_id: int) -> str: ...


class ScopeLookup(Protocol):
    def construct_file_scope(self, anchor: datetime.date, filename: str) -> str: ...

    def data_store_arg(self, store_flag: int, store_string: str) -> str: ...


def snapshot_facet_doc_map(facet_doc_map: FacetDocMap) -> dict[str, dict[str, list[int]]]:
    """Owned copy of a facet-document map; each facet's doc ids distinct and ascending."""
    return {
        count_class: {facet: sorted(set(doc_ids)) for facet, doc_ids in facets.items()}
        for count_class, facets in facet_doc_map.items()
    }


class FacetDocumentResolver:
    """
    Resolves candidate documents to scoped text-graph paths.

    After prepare_file_set() the resolver also exposes:
    - doc_ids: distinct document ids seen, ascending
    - file_scopes: path -> file scope ("AllDates" or "yyyymmdd-yyyymmdd")
    """

    def __init__(
        self,
        facet_doc_map: FacetDocMap,
        doc_table: DocumentLookup,
        context: GraphStoreContext,
        scope: ScopeLookup | None = None,
    ) -> None:
        self._facet_doc_map = snapshot_facet_doc_map(facet_doc_map)
        self._doc_table = doc_table
        self._context = context
        self._scope = scope if scope is not None else SessionScope()
        self.doc_ids: list[int] = []
        self.file_scopes: dict[str, str] = {}
        logger.info("Facet document resolver over %d count classes", len(self._facet_doc_map))

    @property
    def facet_doc_map(self) -> dict[str, dict[str, list[int]]]:
        return copy.deepcopy(self._facet_doc_map)

    def documents_for_facet(self, count_class: str, facet_key: str) -> list[int]:
        """Doc ids recorded for a facet in a count class (empty if absent)."""
        return list(self._facet_doc_map.get(count_class, {}).get(facet_key, []))

    def _resolve_one(self, doc_id: int) -> tuple[str, str]:
        text_graph_file = text_graph_filename(self._doc_table.filename(doc_id))
        file_scope = self._scope.construct_file_scope(EPOCH_ANCHOR, text_graph_file)
        store_arg = self._scope.data_store_arg(0, text_graph_file)
        graph_path = self._context.select_graph_store(store_arg)
        return str(graph_path / text_graph_file), file_scope

    def prepare_file_set(self, candidates: Sequence[tuple[int, str]]) -> list[str]:
        """
        Full paths of the text graphs for the candidates, first-seen order,
        without duplicates.

        Raises IOFailure if any lookup fails. Nothing is published in that
        case and the context's graph store selection is restored.
        """
        paths: dict[str, None] = {}
        scopes: dict[str, str] = {}
        seen_ids: set[int] = set()
        saved = self._context.snapshot()
        try:
            for candidate in candidates:
                doc_id = candidate[0]
                seen_ids.add(doc_id)
                path, file_scope = self._resolve_one(doc_id)
                paths.setdefault(path, None)
                scopes.setdefault(path, file_scope)
        except IOFailure:
            self._context.restore(saved)
            raise
        except Exception as e:
            self._context.restore(saved)
            raise IOFailure(f"Could not resolve text-graph path for candidates: {e}") from e

        self.doc_ids = sorted(seen_ids)
        self.file_scopes = scopes
        logger.debug("Resolved %d candidates to %d text graphs", len(candidates), len(paths))
        return list(paths)
