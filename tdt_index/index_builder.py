"""
Index builder: ingests a directory of corpus documents into the corpus-wide
adjacency, score and count indexes.

For every document: read text -> token occurrences -> local text graph ->
merge into the indexes, and (optionally) write the text graph to its data
store as "<basename>.tgr" so later stages can re-read it.
"""

import logging
from pathlib import Path
from typing import Callable

from .config import (
    ADJACENCY_FILE,
    COUNT_INDEX_FILE,
    DOC_TABLE_FILE,
    LABELS_FILE,
    SCORES_FILE,
    GraphStoreContext,
)
from .counts import CountIndex
from .documents import DocumentTable
from .errors import InvalidArgument
from .scope import collection_key_from_filename, data_store_arg, text_graph_filename
from .storage import (
    read_adjacency,
    read_count_index,
    read_json,
    read_scores,
    write_adjacency,
    write_count_index,
    write_json,
    write_scores,
    write_text_graph,
)
from .text_graph import GraphAggregator, LabelTable, TextGraph
from .tokenizer import DOCUMENT_SUFFIXES, read_document_text, stemmed_tokens, text_to_occurrences

logger = logging.getLogger(__name__)


def find_document_files(data_dir: Path) -> list[Path]:
    """All corpus documents under data_dir (recursive), sorted by path."""
    data_dir = Path(data_dir)
    files = [
        p for p in data_dir.rglob("*")
        if p.is_file() and p.suffix.lower() in DOCUMENT_SUFFIXES
    ]
    return sorted(files, key=lambda p: str(p))


def store_text_graph(graph: TextGraph, base_filename: str, context: GraphStoreContext) -> Path:
    """Write a text graph into the data store chosen by its filename."""
    tgr_file = text_graph_filename(base_filename)
    graph_path = context.select_graph_store(data_store_arg(0, tgr_file), create=True)
    target = graph_path / tgr_file
    write_text_graph(graph, target)
    return target


def ingest_document(
    filepath: Path,
    aggregator: GraphAggregator,
    doc_table: DocumentTable,
    *,
    tokenizer: Callable[[str], list[str]] = stemmed_tokens,
    context: GraphStoreContext | None = None,
) -> TextGraph:
    """
    Ingest one document and return its text graph.
    Raises InvalidArgument if the filename carries no collection key.
    """
    filepath = Path(filepath)
    collection_key = collection_key_from_filename(filepath.name)
    text = read_document_text(filepath)

    doc_id = doc_table.next_id()
    doc_table.add(doc_id, str(filepath))
    occurrences = text_to_occurrences(text, collection_key, tokenizer)
    graph = aggregator.build(doc_id, occurrences, collection_key)
    aggregator.add_text_graph(graph)
    if context is not None and not graph.is_empty():
        store_text_graph(graph, doc_table.filename(doc_id), context)
    return graph


def build_indexes_from_directory(
    data_dir: Path,
    *,
    tokenizer: Callable[[str], list[str]] = stemmed_tokens,
    context: GraphStoreContext | None = None,
    aggregator: GraphAggregator | None = None,
    doc_table: DocumentTable | None = None,
) -> tuple[GraphAggregator, DocumentTable]:
    """
    Build the three indexes from every document under data_dir.
    Unreadable documents and names without a collection key are skipped with a warning.
    Returns (aggregator, document table).
    """
    aggregator = aggregator if aggregator is not None else GraphAggregator()
    doc_table = doc_table if doc_table is not None else DocumentTable()

    for filepath in find_document_files(data_dir):
        try:
            ingest_document(
                filepath, aggregator, doc_table, tokenizer=tokenizer, context=context
            )
        except InvalidArgument as e:
            logger.warning("Skipping %s: %s", filepath, e)
        except (OSError, ValueError) as e:
            logger.warning("Could not read %s: %s", filepath, e)

    logger.info(
        "Indexed %d documents, %d token types", aggregator.doc_count, len(aggregator.labels)
    )
    return aggregator, doc_table


def save_indexes(aggregator: GraphAggregator, doc_table: DocumentTable, out_dir: Path) -> Path:
    """Write all indexes, the label table and the document table under out_dir."""
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    write_count_index(aggregator.counts, out_dir / COUNT_INDEX_FILE)
    write_adjacency(aggregator.adjacency, out_dir / ADJACENCY_FILE)
    write_scores(aggregator.scores, out_dir / SCORES_FILE)
    write_json(aggregator.labels.to_list(), out_dir / LABELS_FILE)
    write_json(doc_table.to_dict(), out_dir / DOC_TABLE_FILE)
    return out_dir / COUNT_INDEX_FILE


def load_indexes(out_dir: Path) -> tuple[GraphAggregator, DocumentTable]:
    """Inverse of save_indexes."""
    out_dir = Path(out_dir)
    counts: CountIndex = read_count_index(out_dir / COUNT_INDEX_FILE)
    aggregator = GraphAggregator(
        adjacency=read_adjacency(out_dir / ADJACENCY_FILE),
        scores=read_scores(out_dir / SCORES_FILE),
        counts=counts,
        labels=LabelTable.from_list(read_json(out_dir / LABELS_FILE)),
    )
    doc_table = DocumentTable.from_dict(read_json(out_dir / DOC_TABLE_FILE))
    aggregator.doc_count = len({d for docs in counts.full_index().values() for d in docs})
    return aggregator, doc_table
