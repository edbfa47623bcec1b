"""
Interactive lookup over the persisted text-graph indexes.

For each query term (stemmed like the indexer does):
- lists the documents the term occurs in, with its count and neighbors there
- resolves the *.tgr files those documents need for the similarity stage

Counts are read through the JSONL lexicon, not loaded whole. With --facets,
candidates come from a facet-document map (the term is used as facet key)
instead of from the adjacency index.

Usage (from repo root, after building the index):
    python -m tdt_index.lookup_cli \
        --index-dir data/work/default \
        --work-path data/work
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Dict, Iterable, List, Tuple

from .config import (
    ADJACENCY_FILE,
    ALL_DATES,
    COUNT_INDEX_FILE,
    DOC_TABLE_FILE,
    LABELS_FILE,
    GraphStoreContext,
)
from .documents import DocumentTable
from .errors import IOFailure, NotFound
from .resolver import FacetDocumentResolver
from .scope import SessionScope
from .storage import DiskCountReader, read_adjacency, read_facet_doc_map, read_json
from .text_graph import LabelTable
from .tokenizer import stemmed_tokens


def normalize_query(raw_query: str) -> List[str]:
    """
    Tokenize and stem the raw query string using the same logic as indexing.
    """
    return stemmed_tokens(raw_query)


def facet_candidates(
    resolver: FacetDocumentResolver,
    term: str,
) -> List[Tuple[int, str]]:
    """(doc_id, count_class) pairs for every count class holding the term as facet."""
    candidates: List[Tuple[int, str]] = []
    for count_class in resolver.facet_doc_map:
        for doc_id in resolver.documents_for_facet(count_class, term):
            candidates.append((doc_id, count_class))
    return candidates


def run_lookup_loop(
    index_dir: Path,
    context: GraphStoreContext,
    scope: SessionScope,
    facets_path: Path | None = None,
    top_k: int = 10,
) -> None:
    """
    Interactive command-line lookup loop.
    """
    adjacency = read_adjacency(index_dir / ADJACENCY_FILE)
    labels = LabelTable.from_list(read_json(index_dir / LABELS_FILE))
    doc_table = DocumentTable.from_dict(read_json(index_dir / DOC_TABLE_FILE))
    facet_doc_map: Dict[str, Dict[str, List[int]]] = {}
    if facets_path is not None:
        facet_doc_map = read_facet_doc_map(facets_path)

    with DiskCountReader(index_dir / COUNT_INDEX_FILE) as reader:
        print(f"Loaded {len(doc_table)} documents, {len(labels)} token types.")
        print("Enter terms. Empty line or Ctrl+C to exit.")

        while True:
            try:
                raw_query = input("term> ").strip()
            except (EOFError, KeyboardInterrupt):
                print()
                break
            if not raw_query:
                break

            terms = normalize_query(raw_query)
            if not terms:
                print("No valid terms in query.")
                continue

            for term in terms:
                if term not in labels:
                    print(f"'{term}': not in the index.")
                    continue
                token_id = labels.lookup(term)
                docs = adjacency.documents_of(term)
                print(f"'{term}' (token {token_id}) occurs in {len(docs)} documents:")
                for doc_id in docs[:top_k]:
                    try:
                        count = reader.count_of(doc_id, token_id)
                    except NotFound:
                        count = 0
                    neighbors = sorted(adjacency.neighbors_of(term, doc_id) or ())
                    print(f"  {doc_table.filename(doc_id)}  count={count}  "
                          f"neighbors={', '.join(neighbors[:8])}")

                resolver = FacetDocumentResolver(facet_doc_map, doc_table, context, scope)
                if facet_doc_map:
                    candidates = facet_candidates(resolver, term)
                else:
                    candidates = [(doc_id, term) for doc_id in docs]
                if not candidates:
                    continue
                try:
                    file_plan = resolver.prepare_file_set(candidates)
                except IOFailure as e:
                    print(f"Could not resolve text graphs: {e}")
                    continue
                print(f"Text graphs for {len(resolver.doc_ids)} documents:")
                for path in file_plan[:top_k]:
                    print(f"  {path}  [{resolver.file_scopes[path]}]")


def main(argv: Iterable[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Text-graph index lookup CLI.")
    parser.add_argument(
        "--index-dir",
        type=Path,
        default=Path("data/work/default"),
        help="Directory with the saved indexes.",
    )
    parser.add_argument(
        "--work-path",
        type=Path,
        default=Path("data/work"),
        help="Root of the work files (graph stores live below it).",
    )
    parser.add_argument(
        "--community",
        default="default",
        help="Community sub-directory of the work path.",
    )
    parser.add_argument(
        "--scope",
        default=ALL_DATES,
        help="Session scope: AllDates or yyyymmdd-yyyymmdd.",
    )
    parser.add_argument(
        "--facets",
        type=Path,
        default=None,
        help="Optional facet-document map JSON to select candidates from.",
    )
    parser.add_argument(
        "--top",
        type=int,
        default=10,
        help="Number of documents/paths to show per term.",
    )
    args = parser.parse_args(list(argv) if argv is not None else None)

    run_lookup_loop(
        index_dir=args.index_dir,
        context=GraphStoreContext(work_path=args.work_path, community=args.community),
        scope=SessionScope(args.scope),
        facets_path=args.facets,
        top_k=args.top,
    )


if __name__ == "__main__":
    main()
