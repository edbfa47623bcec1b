"""
Document table: doc_id -> source path of every ingested document.

Document ids are assigned sequentially by next_id(). The base filename (path
and suffix stripped) is what text-graph files are named after.
"""

from pathlib import PurePath
from typing import Iterator

from .errors import InvalidArgument, NotFound


class DocumentTable:
    def __init__(self) -> None:
        self._paths: dict[int, str] = {}
        self._next_id = 0

    def next_id(self) -> int:
        """Reserve and return the next unused document id."""
        doc_id = self._next_id
        self._next_id += 1
        return doc_id

    def add(self, doc_id: int, path: str) -> None:
        if doc_id in self._paths:
            raise InvalidArgument(f"Document id {doc_id} already registered")
        self._paths[doc_id] = str(path)
        self._next_id = max(self._next_id, doc_id + 1)

    def path(self, doc_id: int) -> str:
        try:
            return self._paths[doc_id]
        except KeyError:
            raise NotFound(f"Unknown document id: {doc_id}") from None

    def filename(self, doc_id: int) -> str:
        """Base filename of the document: no directory, no suffix."""
        return PurePath(self.path(doc_id)).stem

    def doc_id_for(self, filename: str) -> int:
        for doc_id in self._paths:
            if self.filename(doc_id) == filename:
                return doc_id
        raise NotFound(f"No document named {filename!r}")

    def doc_ids(self) -> Iterator[int]:
        return iter(sorted(self._paths))

    def __len__(self) -> int:
        return len(self._paths)

    def __contains__(self, doc_id: int) -> bool:
        return doc_id in self._paths

    def to_dict(self) -> dict[int, str]:
        return dict(self._paths)

    @classmethod
    def from_dict(cls, data: dict) -> "DocumentTable":
        table = cls()
        for doc_id, path in data.items():
            table.add(int(doc_id), path)
        return table
