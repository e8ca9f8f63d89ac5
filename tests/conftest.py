"""Shared fixtures: a small crate exercising most item kinds."""

import copy

import pytest

from rustman.symbol_index import SymbolIndex
from tests.rustdoc_fixtures import (
    crate_json,
    function,
    generic,
    impl,
    item,
    module,
    plain_struct,
    prim,
    resolved,
    struct_field,
)

# demo               (root module)
# ├── Point          struct with two fields and one inherent impl
# ├── origin         fn
# └── shapes         module
#     └── area       fn
DEMO_ITEMS = [
    item("0", "demo", module("1", "4", "6", is_crate=True), docs="A demo crate."),
    item(
        "1",
        "Point",
        plain_struct("2", "3", impls=["7"]),
        docs="A point.\n\nLives on a plane.",
    ),
    item("2", "x", struct_field(prim("i32"))),
    item("3", "y", struct_field(prim("i32"))),
    item("4", "origin", function(output=resolved("Point", "1")), docs="The origin."),
    item("6", "shapes", module("5"), docs="Shapes."),
    item("5", "area", function([("p", resolved("Point", "1"))], prim("f64"))),
    item("7", None, impl(resolved("Point", "1"), items=["8"])),
    item("8", "new", function(output=generic("Self"))),
]

DEMO_PATHS = {
    "0": ["demo"],
    "1": ["demo", "Point"],
    "4": ["demo", "origin"],
    "6": ["demo", "shapes"],
    "5": ["demo", "shapes", "area"],
}


@pytest.fixture
def demo_json() -> dict:
    """Raw rustdoc JSON of the demo crate."""
    return copy.deepcopy(crate_json(DEMO_ITEMS, DEMO_PATHS))


@pytest.fixture
def demo_index(demo_json: dict) -> SymbolIndex:
    """Symbol index of the demo crate."""
    return SymbolIndex.from_json(demo_json)
