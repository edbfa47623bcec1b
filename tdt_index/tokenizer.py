"""
Parsing adapter: extracts text from corpus documents and turns it into token
occurrences for the text-graph builder.
Uses BeautifulSoup (lxml) for HTML and NLTK for word tokenization and Porter stemming.
"""

import json
import re
import warnings
from pathlib import Path
from typing import Callable

from bs4 import BeautifulSoup, XMLParsedAsHTMLWarning, MarkupResemblesLocatorWarning
warnings.filterwarnings("ignore", category=XMLParsedAsHTMLWarning)
warnings.filterwarnings("ignore", category=MarkupResemblesLocatorWarning)

from nltk.stem import PorterStemmer
from nltk.tokenize import word_tokenize as _nltk_word_tokenize
from nltk import download as _nltk_download

from .occurrence import TokenOccurrence

_STEMMER = PorterStemmer()
_PUNKT_READY = False

HTML_SUFFIXES = (".html", ".htm")
TEXT_SUFFIXES = (".txt",)
JSON_SUFFIXES = (".json",)
DOCUMENT_SUFFIXES = HTML_SUFFIXES + TEXT_SUFFIXES + JSON_SUFFIXES


def _ensure_punkt():
    global _PUNKT_READY
    if _PUNKT_READY:
        return
    _nltk_download("punkt", quiet=True)
    _nltk_download("punkt_tab", quiet=True)
    _PUNKT_READY = True


def stem_tokens(tokens: list[str]) -> list[str]:
    """Porter-stem a list of tokens."""
    return [_STEMMER.stem(t) for t in tokens]


def extract_text_from_html(html_content: str) -> str:
    """
    Extract visible text from HTML content, stripping tags and scripts.
    """
    soup = BeautifulSoup(html_content, "lxml")
    for element in soup(["script", "style"]):
        element.decompose()
    return soup.get_text(separator=" ", strip=True)


def tokenize(text: str) -> list[str]:
    """
    Tokenize text with NLTK's word_tokenize (Penn Treebank).
    Returns lowercase, alphanumeric-only tokens; punctuation tokens are dropped.
    """
    if not text:
        return []
    _ensure_punkt()
    raw = _nltk_word_tokenize(text)
    tokens = [re.sub(r"[^a-z0-9]", "", w.lower()) for w in raw]
    return [t for t in tokens if t]


def stemmed_tokens(text: str) -> list[str]:
    """Tokenize and stem; the default tokenizer of the index builder."""
    return stem_tokens(tokenize(text))


def text_to_occurrences(
    text: str,
    collection_key: str,
    tokenizer: Callable[[str], list[str]] = stemmed_tokens,
) -> list[TokenOccurrence]:
    """
    Token occurrences of a text, positions counted from 1 in reading order.
    """
    return [
        TokenOccurrence(label, position, collection_key)
        for position, label in enumerate(tokenizer(text), start=1)
    ]


def read_text_file(filepath: Path) -> str:
    """
    Read a file's content, handling common encodings.
    """
    for encoding in ("utf-8", "latin-1", "cp1252"):
        try:
            return Path(filepath).read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    raise ValueError(f"Could not decode file: {filepath}")


def read_document_text(filepath: Path) -> str:
    """
    Plain text of a corpus document.
    - .html/.htm: visible text
    - .json: the "content" field (HTML is stripped)
    - anything else: the file as is
    """
    filepath = Path(filepath)
    suffix = filepath.suffix.lower()
    if suffix in JSON_SUFFIXES:
        data = json.loads(filepath.read_text(encoding="utf-8"))
        if "content" not in data:
            raise ValueError(f"JSON file has no 'content' field: {filepath}")
        return extract_text_from_html(data["content"])
    content = read_text_file(filepath)
    if suffix in HTML_SUFFIXES:
        return extract_text_from_html(content)
    return content
