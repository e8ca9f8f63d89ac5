"""Logic for rendering type expressions as styled runs.

Every renderer appends to a caller-owned buffer so that sibling order is kept
across recursive calls.
"""

import logging
from collections.abc import Callable, Sequence
from typing import TypeVar

from rustman import generics_renderer
from rustman.inline import Inline, bold, italic, line_break, pad, roman
from rustman.symbol_index import SymbolIndex
from rustman.type_model import (
    ArrayType,
    BorrowedRef,
    DynTrait,
    FunctionPointer,
    GenericType,
    Header,
    ImplTrait,
    InferType,
    PatternType,
    PrimitiveType,
    QualifiedPath,
    RawPointer,
    ResolvedPath,
    SliceType,
    TupleType,
    Type,
)

logger = logging.getLogger(__name__)

WRAP_THRESHOLD = 3

T = TypeVar("T")


def render_sequence(
    buf: list[Inline],
    opener: str,
    closer: str,
    elements: Sequence[T],
    depth: int,
    render_element: Callable[[T, int], None],
    *,
    trailer: str | None = None,
    wrap_count: int | None = None,
) -> None:
    """Render a delimited list, one element per line from three elements up.

    Short lists are joined with ", " on one line. Wrapped lists put every
    element on its own line one level deeper than `depth`, with a comma after
    all but the last, and the closer on its own line. `trailer` (a variadic
    marker) follows the last element and does not count toward the threshold.
    `wrap_count` overrides the number of elements compared to the threshold.
    """
    buf.append(roman(opener))
    count = len(elements) if wrap_count is None else wrap_count
    if count < WRAP_THRESHOLD:
        for i, el in enumerate(elements):
            if i:
                buf.append(roman(", "))
            render_element(el, depth)
        if trailer:
            buf.append(roman(f", {trailer}" if elements else trailer))
        buf.append(roman(closer))
        return

    inner = depth + 1
    for i, el in enumerate(elements):
        if i:
            buf.append(roman(","))
        buf.append(line_break())
        buf.append(roman(pad(inner)))
        render_element(el, inner)
    if trailer:
        buf += [roman(","), line_break(), roman(pad(inner) + trailer)]
    buf.append(line_break())
    if depth:
        buf.append(roman(pad(depth)))
    buf.append(roman(closer))


def abi_tag(abi: str) -> str | None:
    """Quoted ABI literal, or None for the default Rust calling convention."""
    if abi == "Rust":
        return None
    return f'"{abi}"'


def render_header(header: Header, buf: list[Inline]) -> None:
    """Render const/unsafe/async qualifiers and a non-default ABI."""
    if header.is_const:
        buf.append(roman("const "))
    if header.is_unsafe:
        buf.append(roman("unsafe "))
    if header.is_async:
        buf.append(roman("async "))
    tag = abi_tag(header.abi)
    if tag:
        buf.append(roman(f"{tag} "))


def render_type(index: SymbolIndex, ty: Type, depth: int, buf: list[Inline]) -> None:
    """Append the runs for a type expression to `buf`."""

    def nested(t: Type, d: int) -> None:
        render_type(index, t, d, buf)

    if isinstance(ty, ResolvedPath):
        generics_renderer.render_args(index, ty.path.name, ty.path.args, depth, buf)
    elif isinstance(ty, DynTrait):
        buf.append(roman("dyn "))
        for i, poly in enumerate(ty.traits):
            if i:
                buf.append(roman(" + "))
            if poly.generic_params:
                generics_renderer.render_params(
                    index, "for", poly.generic_params, depth, buf
                )
                buf.append(roman(" "))
            generics_renderer.render_args(
                index, poly.trait.name, poly.trait.args, depth, buf
            )
        if ty.lifetime:
            buf.append(roman(f" + {ty.lifetime}"))
    elif isinstance(ty, (GenericType, PrimitiveType)):
        buf.append(bold(ty.name))
    elif isinstance(ty, FunctionPointer):
        if ty.generic_params:
            generics_renderer.render_params(index, "for", ty.generic_params, depth, buf)
            buf.append(roman(" "))
        render_header(ty.header, buf)
        render_sequence(
            buf,
            "fn(",
            ")",
            [t for _, t in ty.sig.inputs],
            depth,
            nested,
            trailer="..." if ty.sig.c_variadic else None,
        )
        if ty.sig.output is not None:
            buf.append(roman(" -> "))
            render_type(index, ty.sig.output, depth, buf)
    elif isinstance(ty, TupleType):
        render_sequence(buf, "(", ")", ty.elements, depth, nested)
    elif isinstance(ty, SliceType):
        buf.append(roman("["))
        render_type(index, ty.element, depth, buf)
        buf.append(roman("]"))
    elif isinstance(ty, ArrayType):
        buf.append(roman("["))
        render_type(index, ty.element, depth, buf)
        buf.append(roman(f"; {ty.length}]"))
    elif isinstance(ty, PatternType):
        logger.warning("pattern types are not supported, skipping")
    elif isinstance(ty, ImplTrait):
        buf.append(roman("impl "))
        generics_renderer.render_bounds(index, ty.bounds, depth, buf)
    elif isinstance(ty, InferType):
        buf.append(roman("_"))
    elif isinstance(ty, RawPointer):
        buf.append(roman("*mut " if ty.mutable else "*const "))
        render_type(index, ty.pointee, depth, buf)
    elif isinstance(ty, BorrowedRef):
        buf.append(roman("&"))
        if ty.lifetime:
            buf.append(roman(f"{ty.lifetime} "))
        if ty.mutable:
            buf.append(roman("mut "))
        render_type(index, ty.pointee, depth, buf)
    elif isinstance(ty, QualifiedPath):
        if ty.trait is not None:
            buf.append(roman("<"))
            render_type(index, ty.self_type, depth, buf)
            buf.append(roman(" as "))
            generics_renderer.render_args(
                index, ty.trait.name, ty.trait.args, depth, buf
            )
            buf.append(roman(">::"))
        else:
            render_type(index, ty.self_type, depth, buf)
            buf.append(roman("::"))
        buf.append(italic(ty.name))
    else:
        msg = f"unhandled type variant: {type(ty).__name__}"
        raise TypeError(msg)
