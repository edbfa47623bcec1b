import json

import pytest

from tdt_index.occurrence import TokenOccurrence
from tdt_index.tokenizer import (
    extract_text_from_html,
    read_document_text,
    stem_tokens,
    text_to_occurrences,
)


def test_extract_text_drops_scripts_and_styles():
    html = (
        "<html><head><style>p {color: red}</style><script>alert(1)</script></head>"
        "<body><h1>Storm</h1><p>hits the coast</p></body></html>"
    )
    assert extract_text_from_html(html) == "Storm hits the coast"


def test_stem_tokens():
    assert stem_tokens(["storms", "running"]) == ["storm", "run"]


def test_occurrences_count_positions_from_one():
    occs = text_to_occurrences("Storm hits coast", "20060512CNN", lambda t: t.lower().split())
    assert occs == [
        TokenOccurrence("storm", 1, "20060512CNN"),
        TokenOccurrence("hits", 2, "20060512CNN"),
        TokenOccurrence("coast", 3, "20060512CNN"),
    ]


def test_read_json_document(tmp_path):
    path = tmp_path / "20060512_CNN_0001.json"
    path.write_text(json.dumps({"content": "<p>Storm warning</p>"}), encoding="utf-8")
    assert read_document_text(path) == "Storm warning"


def test_json_without_content(tmp_path):
    path = tmp_path / "20060512_CNN_0001.json"
    path.write_text(json.dumps({"url": "x"}), encoding="utf-8")
    with pytest.raises(ValueError):
        read_document_text(path)


def test_latin1_text_file(tmp_path):
    path = tmp_path / "20060512_CNN_0001.txt"
    path.write_bytes("caf\xe9 storm".encode("latin-1"))
    assert read_document_text(path) == "caf\xe9 storm"
