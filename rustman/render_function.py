"""Logic for rendering function signatures."""

from rustman.errors import KindMismatchError
from rustman.generics_renderer import render_params, render_where
from rustman.inline import Inline, roman
from rustman.item_model import Function, Item
from rustman.symbol_index import SymbolIndex
from rustman.type_model import BorrowedRef, GenericType, Type
from rustman.type_renderer import render_header, render_sequence, render_type

SELF_TYPE = GenericType("Self")


def render_fn(index: SymbolIndex, item: Item, depth: int, buf: list[Inline]) -> None:
    """Render `qualifiers fn name<params>(inputs) -> output where ...`."""
    func = item.inner
    if not isinstance(func, Function):
        msg = f"expected a function, found {type(func).__name__}"
        raise KindMismatchError(msg)

    render_header(func.header, buf)
    buf.append(roman("fn "))
    render_params(index, item.name or "", func.generics.params, depth, buf)

    def one(arg: tuple[str, Type], d: int) -> None:
        _render_input(index, arg[0], arg[1], d, buf)

    render_sequence(
        buf,
        "(",
        ")",
        func.sig.inputs,
        depth,
        one,
        trailer="..." if func.sig.c_variadic else None,
    )
    if func.sig.output is not None:
        buf.append(roman(" -> "))
        render_type(index, func.sig.output, depth, buf)
    render_where(index, func.generics.where_predicates, depth, buf)


def _render_input(
    index: SymbolIndex, name: str, ty: Type, depth: int, buf: list[Inline]
) -> None:
    # `self: Self` and `self: &Self` are written in their short form.
    if name == "self":
        if ty == SELF_TYPE:
            buf.append(roman("self"))
            return
        if isinstance(ty, BorrowedRef) and ty.pointee == SELF_TYPE:
            lifetime = f"{ty.lifetime} " if ty.lifetime else ""
            mutable = "mut " if ty.mutable else ""
            buf.append(roman(f"&{lifetime}{mutable}self"))
            return
    buf.append(roman(f"{name}: "))
    render_type(index, ty, depth, buf)
