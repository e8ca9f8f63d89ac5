"""Logic for rendering trait and inherent implementations.

Implementations are split into three buckets by provenance. Each non-empty
bucket becomes one section, with a separator rule between its entries.
"""

import logging
from collections.abc import Sequence
from enum import Enum

from rustman.document import Section
from rustman.errors import KindMismatchError
from rustman.generics_renderer import (
    render_args,
    render_bounds,
    render_params,
    render_where,
)
from rustman.inline import Inline, bold, italic, line_break, pad, roman
from rustman.item_model import AssocConst, AssocType, Function, Impl, Item
from rustman.markdown_converter import to_runs
from rustman.render_function import render_fn
from rustman.symbol_index import SymbolIndex
from rustman.type_renderer import render_type

logger = logging.getLogger(__name__)

SEPARATOR = "|=========|"
ITEM_RULE = "  +-----+"


class ImplBucket(Enum):
    """Provenance of an implementation; the value is its section label."""

    CONCRETE = "IMPLS"
    BLANKET = "BLANKET IMPLS"
    AUTO = "AUTO TRAIT IMPLS"


def impl_bucket(impl: Impl) -> ImplBucket:
    """Classify an impl. A blanket source wins over the synthetic flag."""
    if impl.blanket_impl is not None:
        return ImplBucket.BLANKET
    if impl.synthetic:
        return ImplBucket.AUTO
    return ImplBucket.CONCRETE


def partition_impls(
    index: SymbolIndex, impl_ids: Sequence[str]
) -> dict[ImplBucket, list[str]]:
    """Split impl identifiers into buckets, keeping input order within each."""
    buckets: dict[ImplBucket, list[str]] = {b: [] for b in ImplBucket}
    for impl_id in impl_ids:
        _, impl = index.lookup_kind(impl_id, Impl)
        buckets[impl_bucket(impl)].append(impl_id)
    return buckets


def render_impl_sections(index: SymbolIndex, impl_ids: Sequence[str]) -> list[Section]:
    """Render IMPLS, BLANKET IMPLS and AUTO TRAIT IMPLS, skipping empty ones.

    Only concrete impls list their associated items.
    """
    sections = []
    for bucket, ids in partition_impls(index, impl_ids).items():
        if not ids:
            continue
        buf: list[Inline] = []
        render_impl_list(
            index, ids, buf, with_items=bucket is ImplBucket.CONCRETE
        )
        sections.append(Section(bucket.value, tuple(buf)))
    return sections


def render_impl_list(
    index: SymbolIndex,
    impl_ids: Sequence[str],
    buf: list[Inline],
    *,
    with_items: bool,
) -> None:
    """Render impls one after another with a separator rule between them."""
    for i, impl_id in enumerate(impl_ids):
        if i:
            buf += [line_break(), bold(SEPARATOR), line_break(), line_break()]
        _, impl = index.lookup_kind(impl_id, Impl)
        render_impl(index, impl, buf, with_items=with_items)


def render_impl(
    index: SymbolIndex, impl: Impl, buf: list[Inline], *, with_items: bool
) -> None:
    """Render `unsafe impl<params> !Trait for Type where ...`."""
    if impl.is_unsafe:
        buf.append(roman("unsafe "))
    buf.append(roman("impl"))
    render_params(index, "", impl.generics.params, 0, buf)
    buf.append(roman(" "))
    if impl.trait is not None:
        if impl.negative:
            buf.append(roman("!"))
        path = index.path_of(impl.trait.id)
        if path is None:
            logger.warning("failed to find trait path for %s", impl.trait.name)
            path = impl.trait.name
        render_args(index, path, impl.trait.args, 0, buf)
        buf.append(roman(" for "))
    render_type(index, impl.for_, 0, buf)
    render_where(index, impl.generics.where_predicates, 0, buf)
    buf.append(line_break())

    if not with_items:
        return
    for item_id in impl.items:
        buf += [line_break(), italic(ITEM_RULE), line_break(), line_break()]
        render_assoc_entry(index, index.lookup(item_id), 1, buf)
        buf += [line_break(), line_break()]
    buf.append(line_break())


def render_assoc_entry(
    index: SymbolIndex, item: Item, depth: int, buf: list[Inline]
) -> None:
    """Render an associated item's docs followed by its declaration."""
    indent = [roman(pad(depth))] if depth else []
    if item.docs:
        buf += indent
        buf += to_runs(item.docs, depth)
    buf += indent
    render_assoc_item(index, item, depth, buf)


def render_assoc_item(
    index: SymbolIndex, item: Item, depth: int, buf: list[Inline]
) -> None:
    """Render the declaration of an associated fn, const or type."""
    inner = item.inner
    name = item.name or ""
    if isinstance(inner, Function):
        render_fn(index, item, depth, buf)
    elif isinstance(inner, AssocConst):
        buf += [roman("const "), bold(name), roman(": ")]
        render_type(index, inner.type, depth, buf)
        if inner.value is not None:
            buf.append(roman(f" = {inner.value}"))
    elif isinstance(inner, AssocType):
        buf.append(roman("type "))
        render_params(index, name, inner.generics.params, depth, buf)
        if inner.bounds:
            buf.append(roman(": "))
            render_bounds(index, inner.bounds, depth, buf)
        if inner.type is not None:
            buf.append(roman(" = "))
            render_type(index, inner.type, depth, buf)
        render_where(index, inner.generics.where_predicates, depth, buf)
    else:
        msg = f"{type(inner).__name__} {name} cannot be an associated item"
        raise KindMismatchError(msg)
