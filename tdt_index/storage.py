"""
On-disk form of the indexes, the facet-document map and per-document text graphs.

Count index format (JSONL, one token per line, sorted by token id):
    {"token_id": int, "counts": [[doc_id, count], ...]}   (doc ids ascending)
A lexicon file "<index_stem>_lexicon.json" maps each token id to the byte
offset of its line, so a reader can seek to one token without loading the rest.

Everything else is plain JSON. JSON object keys are strings, so integer keys
(doc ids, token ids) are converted back on load.
"""

import json
import logging
from pathlib import Path

from .adjacency import AdjacencyIndex
from .counts import CountIndex
from .errors import NotFound
from .resolver import snapshot_facet_doc_map
from .scores import ScoreIndex
from .text_graph import TextGraph

logger = logging.getLogger(__name__)


def lexicon_path_for(index_path: Path) -> Path:
    index_path = Path(index_path)
    return index_path.with_name(index_path.stem + "_lexicon.json")


def write_count_index(counts: CountIndex, index_path: Path) -> int:
    """
    Write the count index as JSONL plus its lexicon. Returns the number of tokens.
    """
    index_path = Path(index_path)
    index_path.parent.mkdir(parents=True, exist_ok=True)
    full = counts.full_index()
    lexicon: dict[str, int] = {}
    # Binary mode so tell() gives real byte offsets.
    with open(index_path, "wb") as f:
        for token_id in sorted(full):
            lexicon[str(token_id)] = f.tell()
            line_obj = {
                "token_id": token_id,
                "counts": [[doc_id, n] for doc_id, n in sorted(full[token_id].items())],
            }
            f.write((json.dumps(line_obj) + "\n").encode("utf-8"))

    with open(lexicon_path_for(index_path), "w", encoding="utf-8") as lf:
        json.dump(lexicon, lf)
    logger.info("Wrote %d tokens to %s", len(full), index_path)
    return len(full)


def read_count_index(index_path: Path) -> CountIndex:
    """Load a whole JSONL count index back into memory."""
    counts = CountIndex()
    per_doc: dict[int, dict[int, int]] = {}
    with open(index_path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            obj = json.loads(line)
            for doc_id, n in obj["counts"]:
                per_doc.setdefault(int(doc_id), {})[int(obj["token_id"])] = int(n)
    for doc_id in sorted(per_doc):
        counts.merge_document_counts(doc_id, per_doc[doc_id])
    return counts


class DiskCountReader:
    """
    Random-access reader for the on-disk JSONL count index.
    """

    def __init__(self, index_path: Path, lexicon_path: Path | None = None) -> None:
        self.index_path = Path(index_path)
        self.lexicon_path = Path(lexicon_path) if lexicon_path else lexicon_path_for(index_path)

        if not self.index_path.exists():
            raise FileNotFoundError(f"Index file not found: {self.index_path}")
        if not self.lexicon_path.exists():
            raise FileNotFoundError(f"Lexicon file not found: {self.lexicon_path}")

        with open(self.lexicon_path, "r", encoding="utf-8") as f:
            self.lexicon: dict[int, int] = {int(k): v for k, v in json.load(f).items()}

        self._fh = open(self.index_path, "rb")

    def close(self) -> None:
        self._fh.close()

    def __enter__(self) -> "DiskCountReader":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def counts_for(self, token_id: int) -> dict[int, int]:
        """doc_id -> count for a token, or {} if the token is not in the index."""
        offset = self.lexicon.get(token_id)
        if offset is None:
            return {}
        self._fh.seek(offset)
        line = self._fh.readline()
        if not line:
            return {}
        obj = json.loads(line.decode("utf-8"))
        return {int(doc_id): int(n) for doc_id, n in obj["counts"]}

    def count_of(self, document_id: int, token_id: int) -> int:
        try:
            return self.counts_for(token_id)[document_id]
        except KeyError:
            raise NotFound(f"Token {token_id} not recorded for doc {document_id}") from None


def write_json(data, path: Path) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False)


def read_json(path: Path):
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def write_adjacency(adjacency: AdjacencyIndex, path: Path) -> None:
    write_json(adjacency.to_dict(), path)


def read_adjacency(path: Path) -> AdjacencyIndex:
    adjacency = AdjacencyIndex()
    for label, docs in read_json(path).items():
        adjacency.merge_document_neighbors(
            label, {int(doc_id): neighbors for doc_id, neighbors in docs.items()}
        )
    return adjacency


def write_scores(scores: ScoreIndex, path: Path) -> None:
    write_json(scores.to_dict(), path)


def read_scores(path: Path) -> ScoreIndex:
    scores = ScoreIndex()
    for label, values in read_json(path).items():
        scores.merge_values(label, values)
    return scores


def write_facet_doc_map(facet_doc_map, path: Path) -> None:
    write_json(snapshot_facet_doc_map(facet_doc_map), path)


def read_facet_doc_map(path: Path) -> dict[str, dict[str, list[int]]]:
    raw = read_json(path)
    return {
        count_class: {facet: sorted({int(d) for d in doc_ids}) for facet, doc_ids in facets.items()}
        for count_class, facets in raw.items()
    }


def write_text_graph(graph: TextGraph, path: Path) -> None:
    write_json(graph.to_dict(), path)


def read_text_graph(path: Path) -> TextGraph:
    return TextGraph.from_dict(read_json(path))
