"""Logic for loading a rustdoc JSON file into a symbol index."""

import json
from pathlib import Path

from rustman.errors import IndexFormatError
from rustman.symbol_index import SymbolIndex


def load_index(path: Path) -> SymbolIndex:
    """Read and parse a rustdoc JSON file produced by `--output-format json`."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        msg = f"{path}: not valid JSON ({e})"
        raise IndexFormatError(msg) from e
    if not isinstance(data, dict):
        msg = f"{path}: expected a JSON object at the top level"
        raise IndexFormatError(msg)
    return SymbolIndex.from_json(data)
