"""Tests for assembling item pages."""

import logging

import pytest

from rustman.errors import InvalidIdError, KindMismatchError
from rustman.inline import bold, italic, line_break, plain_text, roman
from rustman.render_item import render_item
from rustman.render_options import RenderOptions
from rustman.symbol_index import SymbolIndex
from tests.rustdoc_fixtures import (
    angle,
    function,
    generic,
    impl,
    item,
    make_index,
    module,
    path,
    prim,
    resolved,
    self_ref,
    trait,
    trait_bound,
    type_param,
    unit_struct,
)


def text_of(doc, label: str) -> str:
    section = doc.section(label)
    assert section is not None, f"no {label} section in {doc.labels}"
    return plain_text(section.runs)


def single(inner: dict, *extra: dict, name: str = "X", **kwargs) -> SymbolIndex:
    return make_index(
        [item("0", "c", module("1")), item("1", name, inner, **kwargs), *extra],
        {"0": ["c"], "1": ["c", name]},
    )


def test_struct_section_order() -> None:
    """Verify DEPRECATED, SIGNATURE, docs, impls, SEE ALSO in order."""
    index = make_index(
        [
            item("0", "c", module("1", "2")),
            item(
                "1",
                "Point",
                {"struct": {"kind": "unit", "generics": None, "impls": ["3", "4"]}},
                docs="A point.\n\nMore about it.",
                deprecation={"since": "1.2.0", "note": "use Vector"},
                links={"Vector": "2", "missing": "99"},
            ),
            item("2", "Vector", unit_struct()),
            item("3", None, impl(resolved("Point", "1"))),
            item(
                "4",
                None,
                impl(resolved("Point", "1"), trait=path("Sync"), synthetic=True),
            ),
        ],
        {"0": ["c"], "1": ["c", "Point"], "2": ["c", "Vector"]},
    )
    doc = render_item(index, "1")
    assert doc.labels == [
        "DEPRECATED",
        "SIGNATURE",
        "SYNOPSIS",
        "DESCRIPTION",
        "IMPLS",
        "AUTO TRAIT IMPLS",
        "SEE ALSO",
    ]
    assert doc.title == "c::Point"
    assert doc.page_name == "struct.c::Point"
    assert doc.manual_section == "3r"
    assert doc.section("DEPRECATED").runs == (
        italic("since 1.2.0"),
        line_break(),
        roman("use Vector"),
        line_break(),
    )
    assert doc.section("SEE ALSO").runs == (italic("c::Vector"),)


def test_render_is_idempotent(demo_index: SymbolIndex) -> None:
    """Verify that rendering the same item twice gives equal documents."""
    for item_id in ("0", "1", "4", "6"):
        assert render_item(demo_index, item_id) == render_item(demo_index, item_id)


def test_reexport_has_no_page() -> None:
    """Verify that use and extern crate items produce no document."""
    use = {"use": {"source": "a::b", "name": "b", "id": None, "is_glob": False}}
    assert render_item(single(use), "1") is None
    assert render_item(single({"extern_crate": {"name": "std"}}), "1") is None


def test_impl_has_no_page_of_its_own() -> None:
    """Verify that rendering an impl directly is a kind mismatch."""
    with pytest.raises(KindMismatchError):
        render_item(single(impl(prim("u8"))), "1")


def test_missing_item_is_fatal(demo_index: SymbolIndex) -> None:
    """Verify that an unknown id raises InvalidIdError."""
    with pytest.raises(InvalidIdError):
        render_item(demo_index, "404")


def test_title_falls_back_to_name(caplog: pytest.LogCaptureFixture) -> None:
    """Verify the bare name title when the index has no path."""
    index = make_index([item("0", "c", module("1")), item("1", "Lost", unit_struct())])
    with caplog.at_level(logging.WARNING):
        doc = render_item(index, "1")
    assert doc.title == "Lost"
    assert "no canonical path" in caplog.text


def test_repr_attributes_above_signature() -> None:
    """Verify that only repr attributes are shown unless configured."""
    index = single(unit_struct(), name="Raw", attrs=["#[repr(C)]", "#[must_use]"])
    doc = render_item(index, "1")
    assert text_of(doc, "SIGNATURE") == "#[repr(C)]\nstruct Raw"
    doc = render_item(index, "1", RenderOptions(repr_attributes_only=False))
    assert text_of(doc, "SIGNATURE") == "#[repr(C)]\n#[must_use]\nstruct Raw"


def test_function_page() -> None:
    """Verify a function page and its keyword."""
    doc = render_item(single(function([("x", prim("u8"))]), name="f"), "1")
    assert doc.kind == "fn"
    assert text_of(doc, "SIGNATURE") == "fn f(x: u8)"


def test_trait_page() -> None:
    """Verify trait signature, associated items, safety and implementors."""
    shape = trait(
        "2", "3", "4", "5", implementations=["6"], bounds=[trait_bound("Clone")]
    )
    unit = {"assoc_type": {"generics": None, "bounds": [], "type": None}}
    square = impl(resolved("Square", "7"), trait=path("Shape", "1"), items=["5"])
    index = make_index(
        [
            item("0", "c", module("1")),
            item("1", "Shape", shape, docs="A shape."),
            item("2", "Unit", unit),
            item("3", "SIDES", {"assoc_const": {"type": prim("u8"), "value": None}}),
            item("4", "area", function([("self", self_ref())], prim("f64"))),
            item("5", "name", function(output=resolved("String")), docs="Its name."),
            item("6", None, square),
        ],
        {"0": ["c"], "1": ["c", "Shape"]},
    )
    doc = render_item(index, "1")
    assert doc.labels == [
        "SIGNATURE",
        "DESCRIPTION",
        "ASSOCIATED TYPES",
        "ASSOCIATED CONSTS",
        "FNS",
        "OBJECT SAFETY",
        "IMPLEMENTORS",
    ]
    assert text_of(doc, "SIGNATURE") == "trait Shape: Clone"
    assert text_of(doc, "ASSOCIATED TYPES") == "type Unit\n"
    assert text_of(doc, "ASSOCIATED CONSTS") == "const SIDES: u8\n"
    assert text_of(doc, "FNS") == (
        "fn area(&self) -> f64\n\nIts name.\nfn name() -> String\n"
    )
    assert text_of(doc, "OBJECT SAFETY") == "This trait is object-safe."
    assert text_of(doc, "IMPLEMENTORS") == "impl c::Shape for Square\n"


def test_trait_without_implementors() -> None:
    """Verify that IMPLEMENTORS is omitted when empty and `not` is bold."""
    doc = render_item(single(trait(dyn_compatible=False), name="T"), "1")
    assert "IMPLEMENTORS" not in doc.labels
    assert doc.section("OBJECT SAFETY").runs == (
        roman("This trait is "),
        bold("not"),
        roman(" object-safe."),
    )


def test_trait_alias_and_type_alias() -> None:
    """Verify alias signatures."""
    alias = {
        "trait_alias": {
            "generics": None,
            "params": [trait_bound("Send"), trait_bound("Sync")],
        }
    }
    doc = render_item(single(alias, name="Both"), "1")
    assert doc.kind == "trait"
    assert text_of(doc, "SIGNATURE") == "trait Both = Send + Sync"

    type_alias = {
        "type_alias": {
            "type": resolved("Vec", args=angle(generic("T"))),
            "generics": {"params": [type_param("T")], "where_predicates": []},
        }
    }
    doc = render_item(single(type_alias, name="List"), "1")
    assert doc.kind == "type"
    assert text_of(doc, "SIGNATURE") == "type List<T> = Vec<T>"


def test_const_and_static() -> None:
    """Verify constant and static signatures."""
    const = {"constant": {"type": prim("u32"), "const": {"expr": "10", "value": "10"}}}
    assert text_of(render_item(single(const, name="MAX"), "1"), "SIGNATURE") == (
        "const MAX: u32 = 10"
    )
    hidden = {"constant": {"type": prim("u32"), "const": {"expr": "_"}}}
    assert text_of(render_item(single(hidden, name="K"), "1"), "SIGNATURE") == (
        "const K: u32"
    )
    static = {"static": {"type": prim("u8"), "is_mutable": True, "expr": "0"}}
    doc = render_item(single(static, name="COUNT"), "1")
    assert doc.kind == "static"
    assert text_of(doc, "SIGNATURE") == "static mut COUNT: u8 = 0"


def test_macro_pages() -> None:
    """Verify declarative and procedural macro pages."""
    doc = render_item(single({"macro": "macro_rules! m {}"}, name="m"), "1")
    assert doc.labels == ["NAME"]
    assert text_of(doc, "NAME") == "macro m"

    derive = {"proc_macro": {"kind": "derive", "helpers": ["serde", "skip"]}}
    doc = render_item(single(derive, name="Serialize"), "1")
    assert doc.kind == "macro"
    assert text_of(doc, "SIGNATURE") == "#[derive(Serialize)]"
    assert text_of(doc, "ATTRS") == "#[serde]\n#[skip]\n"

    attr = {"proc_macro": {"kind": "attr", "helpers": []}}
    doc = render_item(single(attr, name="route"), "1")
    assert text_of(doc, "SIGNATURE") == "#[route]"
    assert "ATTRS" not in doc.labels

    bang = {"proc_macro": {"kind": "bang", "helpers": []}}
    assert text_of(render_item(single(bang, name="sql"), "1"), "SIGNATURE") == (
        "proc macro sql"
    )


def test_primitive_page_lists_impls() -> None:
    """Verify that primitives route through the impl renderer."""
    index = make_index(
        [
            item("0", "c", module("1")),
            item("1", "u8", {"primitive": {"name": "u8", "impls": ["2"]}}, docs="B."),
            item("2", None, impl(prim("u8"))),
        ],
        {"1": ["u8"]},
    )
    doc = render_item(index, "1")
    assert doc.labels == ["NAME", "DESCRIPTION", "IMPLS"]
    assert text_of(doc, "NAME") == "primitive u8"
    assert text_of(doc, "IMPLS") == "impl u8\n\n"


def test_extern_type() -> None:
    """Verify extern type signatures."""
    doc = render_item(single({"extern_type": None}, name="Opaque"), "1")
    assert doc.kind == "type"
    assert text_of(doc, "SIGNATURE") == "extern type Opaque"
