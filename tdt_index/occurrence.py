"""
Token occurrence: one token's label, position and collection key in a document.

Several occurrences of the same label in one document are distinct records;
they differ by position.
"""

from dataclasses import dataclass

from .errors import InvalidArgument


@dataclass(frozen=True)
class TokenOccurrence:
    """
    Immutable record produced by tokenizing a document's extracted text.
    - label: the token (already normalized/stemmed by the parsing stage)
    - position: index of the token in the text (non-negative)
    - collection_key: source+date key of the collection the document belongs to
    """

    label: str
    position: int
    collection_key: str

    def __post_init__(self) -> None:
        if not isinstance(self.label, str) or not self.label:
            raise InvalidArgument(f"Token label must be a non-empty string: {self.label!r}")
        if isinstance(self.position, bool) or not isinstance(self.position, int):
            raise InvalidArgument(f"Token position must be an integer: {self.position!r}")
        if self.position < 0:
            raise InvalidArgument(f"Token position must be non-negative: {self.position}")

    def __repr__(self) -> str:
        return (
            f"TokenOccurrence(label={self.label!r}, position={self.position}, "
            f"collection_key={self.collection_key!r})"
        )
