"""
Constants and the explicit graph-store context used during path resolution.

The context replaces a process-wide registry: whoever needs the "current graph
store" receives a GraphStoreContext and reads/writes it directly.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from .errors import NotFound

logger = logging.getLogger(__name__)

# Artifact suffixes. These names are read by other tools; keep them exact.
TEXT_GRAPH_SUFFIX = ".tgr"
TOP_ARCS_SUFFIX = "_TopArcs.tas"
TOPICS_SUFFIX = "_Topics.tpc"

# Session scope meaning "no date restriction".
ALL_DATES = "AllDates"

# Data-store argument that always selects the first store.
FIRST_STORE_ARG = "1"

# Placeholder info value of a token until its collection is fully processed.
INITIAL_INFO_VALUE = -1.0

# Default layout: one graph store per month, keyed by the two-digit month.
DEFAULT_DATA_STORES: tuple[tuple[str, str], ...] = tuple(
    (f"{month:02d}", f"GraphStore{month:02d}") for month in range(1, 13)
)

# Output files written by build_index.py (relative to the work directory).
COUNT_INDEX_FILE = "token_counts.jsonl"
ADJACENCY_FILE = "adjacency.json"
SCORES_FILE = "info_values.json"
DOC_TABLE_FILE = "documents.json"
LABELS_FILE = "labels.json"


@dataclass
class GraphStoreContext:
    """
    Where text-graph (*.tgr) files live, and which store is currently selected.
    - work_path: root of the work files
    - community: sub-directory of work_path for this corpus
    - data_stores: ordered (arg, store_name) pairs; arg is usually a month "05"
    - graph_store_name / graph_path: the current selection (mutable)
    """

    work_path: Path
    community: str = "default"
    data_stores: tuple[tuple[str, str], ...] = DEFAULT_DATA_STORES
    graph_store_name: str = ""
    graph_path: Path | None = field(default=None)

    def __post_init__(self) -> None:
        self.work_path = Path(self.work_path)

    def community_path(self) -> Path:
        return self.work_path / self.community

    def select_graph_store(self, arg: str, *, create: bool = False) -> Path:
        """
        Select the data store matching arg and set graph_store_name / graph_path.

        FIRST_STORE_ARG picks the first store. When no store matches, the
        last configured store is used. With create=True the directory is made.
        """
        if not self.data_stores:
            raise NotFound("No data stores configured")
        chosen = self.data_stores[-1]
        for store in self.data_stores:
            if arg == FIRST_STORE_ARG or store[0] == arg:
                chosen = store
                break
        else:
            logger.debug("No data store for arg %r, using %s", arg, chosen[1])

        self.graph_store_name = chosen[1]
        self.graph_path = self.community_path() / self.graph_store_name
        if create:
            self.graph_path.mkdir(parents=True, exist_ok=True)
        return self.graph_path

    def snapshot(self) -> tuple[str, Path | None]:
        return self.graph_store_name, self.graph_path

    def restore(self, state: tuple[str, Path | None]) -> None:
        self.graph_store_name, self.graph_path = state
