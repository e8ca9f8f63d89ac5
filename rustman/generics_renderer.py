"""Logic for rendering generic parameters, arguments, bounds and where-clauses."""

from collections.abc import Sequence

from rustman import type_renderer
from rustman.inline import Inline, bold, italic, line_break, pad, roman
from rustman.symbol_index import SymbolIndex
from rustman.type_model import (
    AngleBracketed,
    AssocConstraint,
    BoundPredicate,
    ConstArg,
    ConstParam,
    EqPredicate,
    GenericArg,
    GenericArgs,
    GenericBound,
    GenericParam,
    InferArg,
    LifetimeArg,
    LifetimeParam,
    LifetimePredicate,
    OutlivesBound,
    Parenthesized,
    ReturnTypeNotation,
    TraitBound,
    Type,
    TypeArg,
    TypeParam,
    UseBound,
    WherePredicate,
)


def render_params(
    index: SymbolIndex,
    name: str,
    params: Sequence[GenericParam],
    depth: int,
    buf: list[Inline],
) -> None:
    """Render `name<params>`; with no parameters only the bold name is emitted.

    Synthetic parameters (desugared `impl Trait` arguments) are not shown.
    """
    shown = [p for p in params if not _is_synthetic(p)]
    if name:
        buf.append(bold(name))
    if not shown:
        return

    def one(param: GenericParam, d: int) -> None:
        _render_param(index, param, d, buf)

    type_renderer.render_sequence(buf, "<", ">", shown, depth, one)


def _is_synthetic(param: GenericParam) -> bool:
    return isinstance(param.kind, TypeParam) and param.kind.synthetic


def _render_param(
    index: SymbolIndex, param: GenericParam, depth: int, buf: list[Inline]
) -> None:
    kind = param.kind
    if isinstance(kind, LifetimeParam):
        buf.append(italic(param.name))
        if kind.outlives:
            buf.append(roman(": " + " + ".join(kind.outlives)))
    elif isinstance(kind, TypeParam):
        buf.append(italic(param.name))
        if kind.bounds:
            buf.append(roman(": "))
            render_bounds(index, kind.bounds, depth, buf)
        if kind.default is not None:
            buf.append(roman(" = "))
            type_renderer.render_type(index, kind.default, depth, buf)
    elif isinstance(kind, ConstParam):
        buf.append(roman("const "))
        buf.append(italic(param.name))
        buf.append(roman(": "))
        type_renderer.render_type(index, kind.type, depth, buf)
        if kind.default is not None:
            buf.append(roman(f" = {kind.default}"))
    else:
        msg = f"unhandled generic parameter kind: {type(kind).__name__}"
        raise TypeError(msg)


def render_args(
    index: SymbolIndex,
    name: str,
    args: GenericArgs | None,
    depth: int,
    buf: list[Inline],
) -> None:
    """Render a path name followed by its generic arguments, if any."""
    if args is None:
        buf.append(bold(name))
        return

    if isinstance(args, AngleBracketed):
        buf.append(bold(name))
        elements: list[GenericArg | AssocConstraint] = [
            *args.args,
            *args.constraints,
        ]
        if not elements:
            return

        def one(el: GenericArg | AssocConstraint, d: int) -> None:
            _render_arg(index, el, d, buf)

        type_renderer.render_sequence(buf, "<", ">", elements, depth, one)
    elif isinstance(args, Parenthesized):
        buf.append(bold(name))

        def one_input(ty: Type, d: int) -> None:
            type_renderer.render_type(index, ty, d, buf)

        type_renderer.render_sequence(buf, "(", ")", args.inputs, depth, one_input)
        if args.output is not None:
            buf.append(roman(" -> "))
            type_renderer.render_type(index, args.output, depth, buf)
    elif isinstance(args, ReturnTypeNotation):
        buf.append(bold(name))
        buf.append(roman("(..)"))
    else:
        msg = f"unhandled generic args: {type(args).__name__}"
        raise TypeError(msg)


def _render_arg(
    index: SymbolIndex,
    arg: GenericArg | AssocConstraint,
    depth: int,
    buf: list[Inline],
) -> None:
    if isinstance(arg, LifetimeArg):
        buf.append(roman(arg.lifetime))
    elif isinstance(arg, TypeArg):
        type_renderer.render_type(index, arg.type, depth, buf)
    elif isinstance(arg, ConstArg):
        buf.append(roman(arg.expr))
    elif isinstance(arg, InferArg):
        buf.append(roman("_"))
    elif isinstance(arg, AssocConstraint):
        render_args(index, arg.name, arg.args, depth, buf)
        if isinstance(arg.equality, str):
            buf.append(roman(f" = {arg.equality}"))
        elif arg.equality is not None:
            buf.append(roman(" = "))
            type_renderer.render_type(index, arg.equality, depth, buf)
        else:
            buf.append(roman(": "))
            render_bounds(index, arg.bounds, depth, buf)
    else:
        msg = f"unhandled generic arg: {type(arg).__name__}"
        raise TypeError(msg)


def render_bound(
    index: SymbolIndex, bound: GenericBound, depth: int, buf: list[Inline]
) -> None:
    """Render a single bound; `?` marks a relaxed bound such as `?Sized`."""
    if isinstance(bound, TraitBound):
        if bound.generic_params:
            render_params(index, "for", bound.generic_params, depth, buf)
            buf.append(roman(" "))
        if bound.modifier == "maybe":
            buf.append(roman("?"))
        elif bound.modifier == "maybe_const":
            buf.append(roman("~const "))
        render_args(index, bound.trait.name, bound.trait.args, depth, buf)
    elif isinstance(bound, OutlivesBound):
        buf.append(roman(bound.lifetime))
    elif isinstance(bound, UseBound):
        buf.append(roman(f"use<{', '.join(bound.args)}>"))
    else:
        msg = f"unhandled bound: {type(bound).__name__}"
        raise TypeError(msg)


def render_bounds(
    index: SymbolIndex,
    bounds: Sequence[GenericBound],
    depth: int,
    buf: list[Inline],
) -> None:
    """Render bounds joined with " + "."""
    for i, bound in enumerate(bounds):
        if i:
            buf.append(roman(" + "))
        render_bound(index, bound, depth, buf)


def render_where(
    index: SymbolIndex,
    predicates: Sequence[WherePredicate],
    depth: int,
    buf: list[Inline],
) -> None:
    """Render a where-clause for a declaration at `depth`.

    Emits nothing for an empty clause. Otherwise a line break, `where`, then
    each predicate on its own line one level deeper, separated by commas.
    """
    if not predicates:
        return
    buf += [line_break(), roman(pad(depth) + "where")]
    inner = depth + 1
    for i, pred in enumerate(predicates):
        if i:
            buf.append(roman(","))
        buf.append(line_break())
        buf.append(roman(pad(inner)))
        _render_predicate(index, pred, inner, buf)


def _render_predicate(
    index: SymbolIndex, pred: WherePredicate, depth: int, buf: list[Inline]
) -> None:
    if isinstance(pred, BoundPredicate):
        if pred.generic_params:
            render_params(index, "for", pred.generic_params, depth, buf)
            buf.append(roman(" "))
        type_renderer.render_type(index, pred.type, depth, buf)
        buf.append(roman(": "))
        render_bounds(index, pred.bounds, depth, buf)
    elif isinstance(pred, LifetimePredicate):
        buf.append(roman(pred.lifetime))
        if pred.outlives:
            buf.append(roman(": " + " + ".join(pred.outlives)))
    elif isinstance(pred, EqPredicate):
        type_renderer.render_type(index, pred.lhs, depth, buf)
        buf.append(roman(" = "))
        if isinstance(pred.rhs, str):
            buf.append(roman(pred.rhs))
        else:
            type_renderer.render_type(index, pred.rhs, depth, buf)
    else:
        msg = f"unhandled where predicate: {type(pred).__name__}"
        raise TypeError(msg)
