"""
Build the text-graph indexes and print index analytics.

Usage:
    python build_index.py

Put the corpus documents in the data/corpus folder. Filenames start with the
date and source, e.g. 20060512_CNN_0042.html.

Output (under data/work/<community>):
  - token_counts.jsonl          (count index, one token per line)
  - token_counts_lexicon.json   (token id -> byte offset in token_counts.jsonl)
  - adjacency.json, info_values.json, labels.json, documents.json
  - GraphStoreMM/<basename>.tgr (one text graph per document, per month store)
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent))

from tdt_index.config import GraphStoreContext
from tdt_index.index_builder import build_indexes_from_directory, save_indexes


def main() -> None:
    base = Path(__file__).resolve().parent
    parser = argparse.ArgumentParser(description="Build the cross-document text-graph indexes")
    parser.add_argument(
        "--data",
        type=Path,
        default=base / "data" / "corpus",
        help="Directory with the corpus documents (default: data/corpus)",
    )
    parser.add_argument(
        "--work-path",
        type=Path,
        default=base / "data" / "work",
        help="Root of the work files (default: data/work)",
    )
    parser.add_argument(
        "--community",
        default="default",
        help="Community name; indexes go to <work-path>/<community>",
    )
    parser.add_argument(
        "--no-text-graphs",
        action="store_true",
        help="Do not write per-document *.tgr files",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.data.exists():
        print(f"No corpus folder found at {args.data}.")
        sys.exit(1)

    context = GraphStoreContext(work_path=args.work_path, community=args.community)
    aggregator, doc_table = build_indexes_from_directory(
        args.data,
        context=None if args.no_text_graphs else context,
    )
    if len(doc_table) == 0:
        print("No HTML, JSON or text documents found in the corpus folder.")
        sys.exit(1)

    out_dir = context.community_path()
    count_path = save_indexes(aggregator, doc_table, out_dir)
    index_size_kb = count_path.stat().st_size / 1024

    print("\n" + "=" * 50)
    print("TEXT-GRAPH INDEX ANALYTICS")
    print("=" * 50)
    print()
    print("| Metric                        | Value |")
    print("|-------------------------------|-------|")
    print(f"| Number of indexed documents   | {aggregator.doc_count} |")
    print(f"| Number of token types         | {len(aggregator.labels)} |")
    print(f"| Number of vertices            | {len(aggregator.adjacency)} |")
    print(f"| Size of count index (KB)      | {index_size_kb:.2f} |")
    print()
    print("=" * 50)
    print(f"\nIndexes saved to: {out_dir}")
    print()


if __name__ == "__main__":
    main()
