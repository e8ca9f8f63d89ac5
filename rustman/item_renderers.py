"""Logic for rendering the kind-specific sections of item pages.

Every renderer returns its sections in page order: the signature (or NAME),
the doc text, the kind-specific body and finally implementations.
"""

from collections.abc import Callable

from rustman.document import Section
from rustman.errors import KindMismatchError
from rustman.generics_renderer import render_bounds, render_params, render_where
from rustman.impl_renderer import (
    render_assoc_entry,
    render_impl_list,
    render_impl_sections,
)
from rustman.inline import Inline, bold, italic, line_break, roman
from rustman.item_model import (
    AssocConst,
    AssocType,
    Constant,
    Enum,
    ExternType,
    Function,
    Item,
    ItemKind,
    Macro,
    PlainFields,
    Primitive,
    ProcMacro,
    Static,
    Struct,
    Trait,
    TraitAlias,
    TypeAlias,
    Union_,
)
from rustman.render_fields import HIDDEN_FIELDS, render_fields, render_variants
from rustman.render_function import render_fn
from rustman.render_options import RenderOptions
from rustman.split_docs import doc_sections
from rustman.symbol_index import SymbolIndex
from rustman.type_renderer import render_type

ItemRenderer = Callable[[SymbolIndex, Item, RenderOptions], list[Section]]

TRAIT_ITEM_SECTIONS: dict[type, str] = {
    AssocType: "ASSOCIATED TYPES",
    AssocConst: "ASSOCIATED CONSTS",
    Function: "FNS",
}


def _payload(item: Item, kind: type) -> ItemKind:
    if not isinstance(item.inner, kind):
        msg = (
            f"expected {kind.__name__} for {item.name or item.id}, "
            f"found {type(item.inner).__name__}"
        )
        raise KindMismatchError(msg)
    return item.inner


def _signature(buf: list[Inline]) -> Section:
    return Section("SIGNATURE", tuple(buf))


def _name_section(keyword: str, name: str) -> Section:
    return Section("NAME", (roman(f"{keyword} "), bold(name)))


def _render_attributes(item: Item, options: RenderOptions, buf: list[Inline]) -> None:
    """Attribute lines shown above a declaration, one per line."""
    for attr in item.attrs:
        if options.repr_attributes_only and not attr.startswith("#[repr"):
            continue
        buf += [roman(attr), line_break()]


def _expr_suffix(expr: str | None) -> str:
    # rustdoc writes "_" for initializers it does not reproduce.
    if not expr or expr == "_":
        return ""
    return f" = {expr}"


def render_struct(
    index: SymbolIndex, item: Item, options: RenderOptions
) -> list[Section]:
    """Struct page: repr attributes, generics, where-clause and fields."""
    struct = _payload(item, Struct)
    buf: list[Inline] = []
    _render_attributes(item, options, buf)
    buf.append(roman("struct "))
    render_params(index, item.name or "", struct.generics.params, 0, buf)
    render_where(index, struct.generics.where_predicates, 0, buf)
    render_fields(index, struct.kind, 0, buf)
    return [
        _signature(buf),
        *doc_sections(item.docs),
        *render_impl_sections(index, struct.impls),
    ]


def render_union(
    index: SymbolIndex, item: Item, options: RenderOptions
) -> list[Section]:
    union = _payload(item, Union_)
    buf: list[Inline] = []
    _render_attributes(item, options, buf)
    buf.append(roman("union "))
    render_params(index, item.name or "", union.generics.params, 0, buf)
    render_where(index, union.generics.where_predicates, 0, buf)
    render_fields(
        index,
        PlainFields(union.fields, union.fields_stripped),
        0,
        buf,
        stripped_placeholder=HIDDEN_FIELDS,
    )
    return [
        _signature(buf),
        *doc_sections(item.docs),
        *render_impl_sections(index, union.impls),
    ]


def render_enum(
    index: SymbolIndex, item: Item, options: RenderOptions
) -> list[Section]:
    """Enum page: variants one per entry, a blank line apart."""
    enum = _payload(item, Enum)
    buf: list[Inline] = []
    _render_attributes(item, options, buf)
    buf.append(roman("enum "))
    render_params(index, item.name or "", enum.generics.params, 0, buf)
    render_where(index, enum.generics.where_predicates, 0, buf)
    render_variants(index, enum, buf)
    return [
        _signature(buf),
        *doc_sections(item.docs),
        *render_impl_sections(index, enum.impls),
    ]


def render_trait(
    index: SymbolIndex, item: Item, options: RenderOptions
) -> list[Section]:
    """Trait page: signature, associated items, object safety, implementors."""
    trait = _payload(item, Trait)
    buf: list[Inline] = []
    _render_attributes(item, options, buf)
    if trait.is_unsafe:
        buf.append(roman("unsafe "))
    if trait.is_auto:
        buf.append(roman("auto "))
    buf.append(roman("trait "))
    render_params(index, item.name or "", trait.generics.params, 0, buf)
    if trait.bounds:
        buf.append(roman(": "))
        render_bounds(index, trait.bounds, 0, buf)
    render_where(index, trait.generics.where_predicates, 0, buf)

    sections = [_signature(buf), *doc_sections(item.docs)]
    sections += _render_trait_items(index, trait)

    if trait.is_object_safe:
        safety = (roman("This trait is object-safe."),)
    else:
        safety = (roman("This trait is "), bold("not"), roman(" object-safe."))
    sections.append(Section("OBJECT SAFETY", safety))

    if trait.implementations:
        impls: list[Inline] = []
        render_impl_list(index, trait.implementations, impls, with_items=False)
        sections.append(Section("IMPLEMENTORS", tuple(impls)))
    return sections


def _render_trait_items(index: SymbolIndex, trait: Trait) -> list[Section]:
    """Group a trait's associated items into one section per kind."""
    groups: dict[str, list[Inline]] = {
        label: [] for label in TRAIT_ITEM_SECTIONS.values()
    }
    for item_id in trait.items:
        assoc = index.lookup(item_id)
        label = TRAIT_ITEM_SECTIONS.get(type(assoc.inner))
        if label is None:
            msg = (
                f"{type(assoc.inner).__name__} {assoc.name or item_id} "
                "cannot be an associated item"
            )
            raise KindMismatchError(msg)
        buf = groups[label]
        if buf:
            buf.append(line_break())
        render_assoc_entry(index, assoc, 0, buf)
        buf.append(line_break())
    return [Section(label, tuple(buf)) for label, buf in groups.items() if buf]


def render_trait_alias(
    index: SymbolIndex, item: Item, options: RenderOptions
) -> list[Section]:
    alias = _payload(item, TraitAlias)
    buf: list[Inline] = [roman("trait ")]
    render_params(index, item.name or "", alias.generics.params, 0, buf)
    buf.append(roman(" = "))
    render_bounds(index, alias.bounds, 0, buf)
    render_where(index, alias.generics.where_predicates, 0, buf)
    return [_signature(buf), *doc_sections(item.docs)]


def render_function(
    index: SymbolIndex, item: Item, options: RenderOptions
) -> list[Section]:
    _payload(item, Function)
    buf: list[Inline] = []
    _render_attributes(item, options, buf)
    render_fn(index, item, 0, buf)
    return [_signature(buf), *doc_sections(item.docs)]


def render_type_alias(
    index: SymbolIndex, item: Item, options: RenderOptions
) -> list[Section]:
    alias = _payload(item, TypeAlias)
    buf: list[Inline] = [roman("type ")]
    render_params(index, item.name or "", alias.generics.params, 0, buf)
    buf.append(roman(" = "))
    render_type(index, alias.type, 0, buf)
    render_where(index, alias.generics.where_predicates, 0, buf)
    return [_signature(buf), *doc_sections(item.docs)]


def render_constant(
    index: SymbolIndex, item: Item, options: RenderOptions
) -> list[Section]:
    const = _payload(item, Constant)
    buf: list[Inline] = [roman("const "), bold(item.name or ""), roman(": ")]
    render_type(index, const.type, 0, buf)
    suffix = _expr_suffix(const.expr)
    if suffix:
        buf.append(roman(suffix))
    return [_signature(buf), *doc_sections(item.docs)]


def render_static(
    index: SymbolIndex, item: Item, options: RenderOptions
) -> list[Section]:
    static = _payload(item, Static)
    keyword = "static mut " if static.mutable else "static "
    buf: list[Inline] = [roman(keyword), bold(item.name or ""), roman(": ")]
    render_type(index, static.type, 0, buf)
    suffix = _expr_suffix(static.expr)
    if suffix:
        buf.append(roman(suffix))
    return [_signature(buf), *doc_sections(item.docs)]


def render_macro(
    index: SymbolIndex, item: Item, options: RenderOptions
) -> list[Section]:
    _payload(item, Macro)
    return [_name_section("macro", item.name or ""), *doc_sections(item.docs)]


def render_proc_macro(
    index: SymbolIndex, item: Item, options: RenderOptions
) -> list[Section]:
    """Proc macro page; helper attributes of derives go in ATTRS."""
    macro = _payload(item, ProcMacro)
    name = item.name or ""
    if macro.kind == "attr":
        buf = [roman("#["), bold(name), roman("]")]
    elif macro.kind == "derive":
        buf = [roman("#[derive("), bold(name), roman(")]")]
    else:
        buf = [roman("proc macro "), bold(name)]

    sections = [_signature(buf), *doc_sections(item.docs)]
    if macro.helpers:
        attrs: list[Inline] = []
        for helper in macro.helpers:
            attrs += [roman("#["), italic(helper), roman("]"), line_break()]
        sections.append(Section("ATTRS", tuple(attrs)))
    return sections


def render_primitive(
    index: SymbolIndex, item: Item, options: RenderOptions
) -> list[Section]:
    primitive = _payload(item, Primitive)
    return [
        _name_section("primitive", primitive.name),
        *doc_sections(item.docs),
        *render_impl_sections(index, primitive.impls),
    ]


def render_extern_type(
    index: SymbolIndex, item: Item, options: RenderOptions
) -> list[Section]:
    _payload(item, ExternType)
    buf = [roman("extern type "), bold(item.name or "")]
    return [_signature(buf), *doc_sections(item.docs)]
