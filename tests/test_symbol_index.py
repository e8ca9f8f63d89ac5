"""Tests for symbol index lookups and loading."""

import json
from pathlib import Path

import pytest

from rustman.errors import IndexFormatError, InvalidIdError, KindMismatchError
from rustman.item_model import Function, Module, Struct
from rustman.load_index import load_index
from rustman.symbol_index import SymbolIndex
from tests.rustdoc_fixtures import item, make_index, module


def test_lookup_returns_decoded_item(demo_index: SymbolIndex) -> None:
    """Verify that lookup decodes the item and its payload."""
    point = demo_index.lookup("1")
    assert point.name == "Point"
    assert isinstance(point.inner, Struct)
    assert point.docs == "A point.\n\nLives on a plane."


def test_lookup_missing_id_is_fatal(demo_index: SymbolIndex) -> None:
    """Verify that an absent identifier raises InvalidIdError."""
    with pytest.raises(InvalidIdError, match="invalid identifier: 42"):
        demo_index.lookup("42")


def test_lookup_kind_checks_payload(demo_index: SymbolIndex) -> None:
    """Verify that lookup_kind rejects a payload of another kind."""
    _, func = demo_index.lookup_kind("4", Function)
    assert func.sig.inputs == ()
    with pytest.raises(KindMismatchError, match="expected Module"):
        demo_index.lookup_kind("4", Module)


def test_path_of_joins_segments(demo_index: SymbolIndex) -> None:
    """Verify that canonical paths are joined with '::'."""
    assert demo_index.path_of("5") == "demo::shapes::area"
    assert demo_index.path_of("2") is None
    assert demo_index.path_of(None) is None


def test_contains(demo_index: SymbolIndex) -> None:
    """Verify membership checks by identifier."""
    assert "1" in demo_index
    assert "99" not in demo_index


def test_integer_ids_are_normalized() -> None:
    """Verify that integer ids from newer formats are accepted."""
    data = {
        "root": 0,
        "index": {"0": item("0", "c", module())},
        "paths": {"0": {"path": ["c"], "kind": "module"}},
    }
    data["index"]["0"]["id"] = 0
    index = SymbolIndex.from_json(data)
    assert index.root == "0"
    assert index.lookup(0).id == "0"
    assert index.path_of(0) == "c"


def test_from_json_requires_index_and_root() -> None:
    """Verify that non-rustdoc JSON is rejected."""
    with pytest.raises(IndexFormatError):
        SymbolIndex.from_json({"paths": {}})


def test_malformed_item_only_fails_its_lookup() -> None:
    """Verify that decoding is lazy and per item."""
    index = make_index(
        [item("0", "c", module("1")), item("1", "bad", {"no_such_kind": {}})]
    )
    assert index.lookup("0").name == "c"
    with pytest.raises(IndexFormatError, match="unknown item kind"):
        index.lookup("1")


def test_load_index_from_file(tmp_path: Path, demo_json: dict) -> None:
    """Verify loading an index from a JSON file."""
    path = tmp_path / "demo.json"
    path.write_text(json.dumps(demo_json), encoding="utf-8")
    index = load_index(path)
    assert index.root == "0"
    assert index.crate_version == "0.1.0"
    assert index.format_version == 39


def test_load_index_rejects_invalid_json(tmp_path: Path) -> None:
    """Verify that unparsable JSON raises IndexFormatError."""
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(IndexFormatError, match="not valid JSON"):
        load_index(path)
