"""Logic for assembling the manual page of a single item."""

import logging

from rustman.document import Document, Section
from rustman.errors import KindMismatchError
from rustman.inline import Inline, italic, line_break, roman
from rustman.item_model import (
    Constant,
    Deprecation,
    Enum,
    ExternCrate,
    ExternType,
    Function,
    Item,
    Macro,
    Module,
    Primitive,
    ProcMacro,
    Static,
    Struct,
    Trait,
    TraitAlias,
    TypeAlias,
    Union_,
    Use,
)
from rustman.item_renderers import (
    ItemRenderer,
    render_constant,
    render_enum,
    render_extern_type,
    render_function,
    render_macro,
    render_primitive,
    render_proc_macro,
    render_static,
    render_struct,
    render_trait,
    render_trait_alias,
    render_type_alias,
    render_union,
)
from rustman.render_module import render_module
from rustman.render_options import RenderOptions
from rustman.symbol_index import SymbolIndex

logger = logging.getLogger(__name__)

# Kinds that get a page: payload type -> (page keyword, renderer).
PAGE_KINDS: dict[type, tuple[str, ItemRenderer]] = {
    Module: ("mod", render_module),
    Struct: ("struct", render_struct),
    Enum: ("enum", render_enum),
    Union_: ("union", render_union),
    Trait: ("trait", render_trait),
    TraitAlias: ("trait", render_trait_alias),
    Function: ("fn", render_function),
    TypeAlias: ("type", render_type_alias),
    Constant: ("const", render_constant),
    Static: ("static", render_static),
    Macro: ("macro", render_macro),
    ProcMacro: ("macro", render_proc_macro),
    Primitive: ("primitive", render_primitive),
    ExternType: ("type", render_extern_type),
}

# Re-exports and extern crate declarations have no page of their own.
NO_PAGE_KINDS = (Use, ExternCrate)


def canonical_title(index: SymbolIndex, item: Item) -> str:
    """The item's `::`-joined path, falling back to its bare name."""
    path = index.path_of(item.id)
    if path is not None:
        return path
    logger.warning("no canonical path for %s, using its name", item.name or item.id)
    return item.name or item.id


def render_item(
    index: SymbolIndex, item_id: str, options: RenderOptions | None = None
) -> Document | None:
    """Render one item into a Document, or None for kinds without a page.

    Raises RenderError subclasses when the index is inconsistent.
    """
    options = options or RenderOptions()
    item = index.lookup(item_id)
    if isinstance(item.inner, NO_PAGE_KINDS):
        return None
    entry = PAGE_KINDS.get(type(item.inner))
    if entry is None:
        msg = f"{type(item.inner).__name__} {item.name or item.id} has no page"
        raise KindMismatchError(msg)
    keyword, renderer = entry

    sections = []
    if item.deprecation is not None:
        sections.append(deprecation_section(item.deprecation))
    sections += renderer(index, item, options)
    see_also = see_also_section(index, item)
    if see_also is not None:
        sections.append(see_also)

    return Document(
        title=canonical_title(index, item),
        kind=keyword,
        manual_section=options.manual_section,
        sections=tuple(sections),
    )


def deprecation_section(deprecation: Deprecation) -> Section:
    runs: list[Inline] = []
    if deprecation.since:
        runs += [italic(f"since {deprecation.since}"), line_break()]
    if deprecation.note:
        runs += [roman(deprecation.note), line_break()]
    return Section("DEPRECATED", tuple(runs))


def see_also_section(index: SymbolIndex, item: Item) -> Section | None:
    """Cross-references from intra-doc links that resolve to a path."""
    paths = []
    for _, target in item.links:
        path = index.path_of(target)
        if path is not None and path not in paths:
            paths.append(path)
    if not paths:
        return None
    runs: list[Inline] = []
    for i, path in enumerate(paths):
        if i:
            runs.append(roman(", "))
        runs.append(italic(path))
    return Section("SEE ALSO", tuple(runs))
