"""Logic for rendering module pages and their grouped item index."""

import logging

from rustman.document import Section
from rustman.errors import KindMismatchError
from rustman.inline import Inline, bold, italic, line_break, roman
from rustman.item_model import (
    Constant,
    Enum,
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
)
from rustman.render_options import RenderOptions
from rustman.split_docs import doc_sections, summary_line
from rustman.symbol_index import SymbolIndex
from rustman.truncate import truncate

logger = logging.getLogger(__name__)

# (section label, kind keyword, payload type), in page order.
INDEX_GROUPS: list[tuple[str, str, type]] = [
    ("MODULES", "mod", Module),
    ("UNIONS", "union", Union_),
    ("STRUCTS", "struct", Struct),
    ("ENUMS", "enum", Enum),
    ("FNS", "fn", Function),
    ("TRAITS", "trait", Trait),
    ("TRAIT ALIASES", "trait", TraitAlias),
    ("TYPE ALIASES", "type", TypeAlias),
    ("CONSTANTS", "const", Constant),
    ("STATICS", "static", Static),
    ("MACROS", "macro", Macro),
    ("PROC MACROS", "macro", ProcMacro),
    ("PRIMITIVES", "primitive", Primitive),
    ("EXTERN TYPES", "type", ExternType),
]

# Separator and comment marker around an entry's summary.
SUMMARY_OVERHEAD = 5


def render_module(
    index: SymbolIndex, item: Item, options: RenderOptions
) -> list[Section]:
    """Module page: NAME, docs, then one index section per non-empty group."""
    module = item.inner
    if not isinstance(module, Module):
        msg = (
            f"expected Module for {item.name or item.id}, "
            f"found {type(module).__name__}"
        )
        raise KindMismatchError(msg)

    sections = [
        Section("NAME", (roman("mod "), bold(item.name or ""))),
        *doc_sections(item.docs),
    ]
    children = [index.lookup(child_id) for child_id in module.items]
    for label, keyword, kind in INDEX_GROUPS:
        runs: list[Inline] = []
        for child in children:
            if isinstance(child.inner, kind):
                runs += index_entry(index, child, keyword, options.max_width)
        if runs:
            sections.append(Section(label, tuple(runs)))
    return sections


def index_entry(
    index: SymbolIndex, child: Item, keyword: str, max_width: int
) -> list[Inline]:
    """One index line: keyword, italic path and a truncated summary comment."""
    path = index.path_of(child.id)
    if path is None:
        logger.warning("no canonical path for %s %s", keyword, child.name)
        path = child.name or child.id

    runs = [roman(f"{keyword} "), italic(path)]
    if child.docs:
        # Measured in UTF-8 bytes, like truncate.
        prefix = len(f"{keyword}{path}".encode())
        width = max(max_width - (prefix + SUMMARY_OVERHEAD), 0)
        runs += [
            roman(" "),
            bold("// "),
            roman(truncate(summary_line(child.docs), width)),
        ]
    runs.append(line_break())
    return runs
